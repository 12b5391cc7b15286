"""✨ Gemini client - Text generation over the generateContent REST API."""

from __future__ import annotations

from typing import Any

import httpx

from ..errors import AssistantError, MissingCredentialsError
from .bridge import AssistantPort


class GeminiAssistant(AssistantPort):
    """Assistant backed by Google's Gemini API.

    Example:
        assistant = GeminiAssistant(api_key="...", model="gemini-2.5-flash")
        text = await assistant.generate(system_prompt, "Why is dash_mkt broken?", 0.2)
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: Gemini API key (empty means not configured)
            model: Model name
            base_url: API root
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "GeminiAssistant":
        from ..config import get_settings

        settings = get_settings()
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.assistant_timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _body(self, system_prompt: str, query: str, temperature: float) -> dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": query}]}],
            "generationConfig": {"temperature": temperature},
        }

    async def generate(self, system_prompt: str, query: str, temperature: float) -> str:
        """Send one request and return the concatenated text parts.

        Raises:
            MissingCredentialsError: If no API key is configured
            AssistantError: On HTTP or payload errors
        """
        if not self.api_key:
            raise MissingCredentialsError("Gemini API key is not configured")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post(
                    url,
                    params={"key": self.api_key},
                    json=self._body(system_prompt, query, temperature),
                )
            except httpx.HTTPError as e:
                raise AssistantError(f"Gemini request failed: {e}") from e

        if response.status_code >= 400:
            error_msg = response.text
            try:
                error_msg = response.json().get("error", {}).get("message", error_msg)
            except (ValueError, AttributeError):
                pass
            raise AssistantError(f"Gemini API error ({response.status_code}): {error_msg}")

        try:
            data = response.json()
        except ValueError as e:
            raise AssistantError("Gemini returned a non-JSON response") from e

        return _extract_text(data)


def _extract_text(data: dict[str, Any]) -> str:
    """Join the text parts of the first candidate. Empty if there is none."""
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))
