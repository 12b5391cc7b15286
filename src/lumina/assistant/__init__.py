"""🤖 Assistant - Natural language questions about the lineage graph."""

from .bridge import (
    EMPTY_REPLY_MESSAGE,
    GREETING,
    MISSING_KEY_MESSAGE,
    SERVICE_ERROR_MESSAGE,
    AssistantBridge,
    AssistantPort,
)
from .context import GraphContext, build_system_prompt
from .gemini import GeminiAssistant

__all__ = [
    "AssistantBridge",
    "AssistantPort",
    "EMPTY_REPLY_MESSAGE",
    "GREETING",
    "GeminiAssistant",
    "GraphContext",
    "MISSING_KEY_MESSAGE",
    "SERVICE_ERROR_MESSAGE",
    "build_system_prompt",
]
