"""🧪 Tests for the assistant bridge and the Gemini client."""

import asyncio
import json

import httpx
import pytest

from lumina.assistant import (
    EMPTY_REPLY_MESSAGE,
    MISSING_KEY_MESSAGE,
    SERVICE_ERROR_MESSAGE,
    AssistantBridge,
    AssistantPort,
    GeminiAssistant,
    GraphContext,
    build_system_prompt,
)
from lumina.assistant.context import reduce_nodes
from lumina.errors import AssistantError, MissingCredentialsError


class RecordingAssistant(AssistantPort):
    """Port that records its calls and returns a canned reply."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def generate(self, system_prompt, query, temperature):
        self.calls.append((system_prompt, query, temperature))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def context(seed):
    return GraphContext(seed.nodes, seed.edges, "dash_mkt")


def gemini_reply(text):
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


class TestContext:
    """Tests for the reduced graph context."""

    def test_reduced_nodes_only_keep_summary_fields(self, seed):
        reduced = reduce_nodes(seed.nodes)

        assert set(reduced[0]) == {"id", "label", "type", "status", "quality", "owner"}
        assert reduced[0]["type"] == "SOURCE"

    def test_prompt_includes_graph_and_selection(self, context):
        prompt = build_system_prompt(context)

        assert '"id": "stg_events"' in prompt
        assert '"source": "fct_attribution", "target": "dash_mkt"' in prompt
        assert "Currently Selected Node: dash_mkt" in prompt
        assert "description" not in prompt.split("Current Graph Data:")[1]

    def test_prompt_without_selection(self, seed):
        prompt = build_system_prompt(GraphContext(seed.nodes, seed.edges))
        assert "Currently Selected Node: None" in prompt


class TestAssistantBridge:
    """Tests for AssistantBridge.analyze."""

    def test_returns_reply_verbatim(self, context):
        port = RecordingAssistant(reply="stg_events is the root cause.")
        answer = asyncio.run(AssistantBridge(port).analyze("why?", context))

        assert answer == "stg_events is the root cause."
        system_prompt, query, temperature = port.calls[0]
        assert query == "why?"
        assert temperature == 0.2
        assert "Data Observability Assistant" in system_prompt

    def test_empty_reply_fallback(self, context):
        port = RecordingAssistant(reply="")
        assert asyncio.run(AssistantBridge(port).analyze("q", context)) == EMPTY_REPLY_MESSAGE

    def test_service_error_fallback(self, context):
        port = RecordingAssistant(error=AssistantError("boom"))
        assert asyncio.run(AssistantBridge(port).analyze("q", context)) == SERVICE_ERROR_MESSAGE

    def test_unexpected_error_fallback(self, context):
        port = RecordingAssistant(error=RuntimeError("socket closed"))
        assert asyncio.run(AssistantBridge(port).analyze("q", context)) == SERVICE_ERROR_MESSAGE

    def test_missing_credentials_fallback(self, context):
        port = RecordingAssistant(error=MissingCredentialsError("no key"))
        assert asyncio.run(AssistantBridge(port).analyze("q", context)) == MISSING_KEY_MESSAGE

    def test_unconfigured_port_is_not_called(self, context):
        assistant = GeminiAssistant(api_key="")
        answer = asyncio.run(AssistantBridge(assistant).analyze("q", context))
        assert answer == MISSING_KEY_MESSAGE


class TestGeminiAssistant:
    """Tests for the Gemini REST client."""

    def test_request_shape(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=gemini_reply("All good."))

        assistant = GeminiAssistant(
            api_key="secret",
            model="gemini-test",
            base_url="https://example.test/v1beta/",
            transport=httpx.MockTransport(handler),
        )
        text = asyncio.run(assistant.generate("SYSTEM", "hello", 0.2))

        assert text == "All good."
        assert seen["url"].startswith("https://example.test/v1beta/models/gemini-test:generateContent")
        assert "key=secret" in seen["url"]
        assert seen["body"]["systemInstruction"]["parts"][0]["text"] == "SYSTEM"
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "hello"
        assert seen["body"]["generationConfig"]["temperature"] == 0.2

    def test_joins_parts(self):
        reply = {"candidates": [{"content": {"parts": [{"text": "a"}, {"text": "b"}]}}]}
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json=reply))
        assistant = GeminiAssistant(api_key="k", transport=transport)

        assert asyncio.run(assistant.generate("s", "q", 0.2)) == "ab"

    def test_no_candidates_is_empty(self):
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json={"candidates": []}))
        assistant = GeminiAssistant(api_key="k", transport=transport)

        assert asyncio.run(assistant.generate("s", "q", 0.2)) == ""

    def test_http_error_raises(self):
        transport = httpx.MockTransport(
            lambda r: httpx.Response(403, json={"error": {"message": "API key not valid"}})
        )
        assistant = GeminiAssistant(api_key="bad", transport=transport)

        with pytest.raises(AssistantError, match="API key not valid"):
            asyncio.run(assistant.generate("s", "q", 0.2))

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        assistant = GeminiAssistant(api_key="k", transport=httpx.MockTransport(handler))

        with pytest.raises(AssistantError, match="request failed"):
            asyncio.run(assistant.generate("s", "q", 0.2))

    def test_missing_key_raises(self):
        with pytest.raises(MissingCredentialsError):
            asyncio.run(GeminiAssistant(api_key="").generate("s", "q", 0.2))

    def test_from_settings(self, monkeypatch):
        from lumina.config import get_settings

        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        monkeypatch.setenv("LUMINA_GEMINI_MODEL", "gemini-pro")
        get_settings.cache_clear()

        assistant = GeminiAssistant.from_settings()

        assert assistant.api_key == "from-env"
        assert assistant.model == "gemini-pro"
        assert assistant.configured
