"""🤖 Assistant Bridge - Ask questions about the lineage graph.

The bridge serializes a reduced view of the graph into a system prompt and
makes a single call to an ``AssistantPort``. It never raises: missing
credentials, service errors and empty replies all map to fixed fallback
messages. There is no retry.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..errors import MissingCredentialsError
from .context import GraphContext, build_system_prompt

logger = logging.getLogger(__name__)

GREETING = (
    "Hello! I am Lumina AI. I can help you diagnose errors, analyze impact, "
    "or explain the data flow. Ask me anything about the current graph."
)
MISSING_KEY_MESSAGE = "API Key is missing. Please check your configuration."
EMPTY_REPLY_MESSAGE = "I could not generate an analysis at this time."
SERVICE_ERROR_MESSAGE = "Sorry, I encountered an error communicating with the AI service."

ANALYSIS_TEMPERATURE = 0.2


class AssistantPort(ABC):
    """Abstract text generation service."""

    @property
    def configured(self) -> bool:
        """Whether credentials are available."""
        return True

    @abstractmethod
    async def generate(self, system_prompt: str, query: str, temperature: float) -> str:
        """Return the model's answer to ``query``."""
        pass


class AssistantBridge:
    """Single request/response analysis calls."""

    def __init__(self, port: AssistantPort, temperature: float = ANALYSIS_TEMPERATURE):
        self.port = port
        self.temperature = temperature

    async def analyze(self, query: str, context: GraphContext) -> str:
        """Answer ``query`` about the graph in ``context``.

        Returns:
            The model's text verbatim, or a fallback message
        """
        if not self.port.configured:
            return MISSING_KEY_MESSAGE

        system_prompt = build_system_prompt(context)
        try:
            text = await self.port.generate(system_prompt, query, self.temperature)
        except MissingCredentialsError:
            return MISSING_KEY_MESSAGE
        except Exception as e:  # any service failure becomes a chat message
            logger.warning("Assistant call failed: %s", e)
            return SERVICE_ERROR_MESSAGE

        return text or EMPTY_REPLY_MESSAGE
