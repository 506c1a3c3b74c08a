import json

import httpx
import pytest

from quizzer.config import Settings
from quizzer.errors import TransportError
from quizzer.services.transports import (
    AnthropicTransport,
    OpenAITransport,
    build_transport,
)


def _chat_completion(content: str | None) -> dict[str, object]:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def _anthropic_message(text: str) -> dict[str, object]:
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "model": "claude-3-haiku-20240307",
        "content": [{"type": "text", "text": text}],
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": 1, "output_tokens": 1},
    }


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestOpenAITransport:
    @pytest.mark.asyncio
    async def test_request_shape(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_chat_completion("[]"))

        transport = OpenAITransport(
            "sk-test",
            model="gpt-4o-mini",
            base_url="https://llm.test/v1",
            http_client=_client(handler),
        )
        text = await transport.complete("system says", "user says", 0.2, 4000)

        assert text == "[]"
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/v1/chat/completions"
        assert request.headers["authorization"] == "Bearer sk-test"
        assert request.headers["content-type"].startswith("application/json")

        body = json.loads(request.content)
        assert body["model"] == "gpt-4o-mini"
        assert body["temperature"] == 0.2
        assert body["max_tokens"] == 4000
        assert body["messages"] == [
            {"role": "system", "content": "system says"},
            {"role": "user", "content": "user says"},
        ]

    @pytest.mark.asyncio
    async def test_null_content_becomes_empty_string(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_chat_completion(None))

        transport = OpenAITransport(
            "sk-test", base_url="https://llm.test/v1", http_client=_client(handler)
        )
        assert await transport.complete("s", "u", 0.3, 10) == ""

    @pytest.mark.asyncio
    async def test_non_2xx_surfaces_body_without_retry(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(429, json={"error": {"message": "rate limited"}})

        transport = OpenAITransport(
            "sk-test", base_url="https://llm.test/v1", http_client=_client(handler)
        )
        with pytest.raises(TransportError) as exc_info:
            await transport.complete("s", "u", 0.3, 10)

        assert exc_info.value.status_code == 429
        assert "rate limited" in (exc_info.value.body or "")
        assert calls == 1

    @pytest.mark.asyncio
    async def test_network_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = OpenAITransport(
            "sk-test", base_url="https://llm.test/v1", http_client=_client(handler)
        )
        with pytest.raises(TransportError) as exc_info:
            await transport.complete("s", "u", 0.3, 10)
        assert exc_info.value.status_code is None


class TestAnthropicTransport:
    @pytest.mark.asyncio
    async def test_request_shape(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_anthropic_message("[1]"))

        transport = AnthropicTransport("ak-test", http_client=_client(handler))
        text = await transport.complete("system says", "user says", 0.3, 4000)

        assert text == "[1]"
        body = json.loads(seen[0].content)
        assert body["system"] == "system says"
        assert body["messages"] == [{"role": "user", "content": "user says"}]
        assert body["temperature"] == 0.3
        assert seen[0].headers["x-api-key"] == "ak-test"

    @pytest.mark.asyncio
    async def test_non_2xx(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                401,
                json={"type": "error", "error": {"type": "authentication_error", "message": "bad key"}},
            )

        transport = AnthropicTransport("ak-test", http_client=_client(handler))
        with pytest.raises(TransportError) as exc_info:
            await transport.complete("s", "u", 0.3, 10)
        assert exc_info.value.status_code == 401


class TestBuildTransport:
    def test_explicit_key_wins(self, settings: Settings) -> None:
        transport = build_transport("sk-client", settings)
        assert isinstance(transport, OpenAITransport)
        assert transport.client.api_key == "sk-client"

    def test_falls_back_to_configured_key(self, settings: Settings) -> None:
        transport = build_transport(None, settings)
        assert isinstance(transport, OpenAITransport)
        assert transport.client.api_key == "sk-test"
        assert transport.model == settings.openai_model

    def test_anthropic_provider(self) -> None:
        settings = Settings(_env_file=None, llm_provider="anthropic", anthropic_api_key="ak")
        assert isinstance(build_transport(None, settings), AnthropicTransport)

    def test_no_key(self) -> None:
        settings = Settings(_env_file=None, openai_api_key=None)
        with pytest.raises(TransportError):
            build_transport(None, settings)
