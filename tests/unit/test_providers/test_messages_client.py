"""
Messages Client Unit Tests

HTTP exchanges are served by httpx.MockTransport.
"""

import json
from unittest.mock import patch

import httpx
import pytest

from claude_messages.client import MessagesClient, build_messages_url
from claude_messages.common.errors import (
    ApiError,
    ConfigurationError,
    DecodeError,
    StreamOptionMismatch,
    TransportError,
    TruncatedStreamError,
)
from claude_messages.config import Settings
from claude_messages.domain import (
    Beta,
    CacheTtl,
    ContentBlockDeltaEvent,
    ErrorType,
    Message,
    MessagesRequestBody,
    MessagesResponseBody,
    MessageStartEvent,
    StopReason,
    TextContentBlock,
)

SSE_HEADERS = {"content-type": "text/event-stream; charset=utf-8"}


def _request(**overrides) -> MessagesRequestBody:
    values = dict(max_tokens=1024, messages=[Message.user("Hello, Claude")])
    values.update(overrides)
    return MessagesRequestBody(**values)


class TestBuildMessagesUrl:
    """Endpoint URL Construction Test"""

    @pytest.mark.parametrize(
        "base_url, expected",
        [
            ("https://api.anthropic.com", "https://api.anthropic.com/v1/messages"),
            ("https://api.anthropic.com/", "https://api.anthropic.com/v1/messages"),
            ("https://api.anthropic.com/v1", "https://api.anthropic.com/v1/messages"),
            ("https://proxy.example.com/anthropic/v1/", "https://proxy.example.com/anthropic/v1/messages"),
        ],
    )
    def test_build(self, base_url, expected):
        assert build_messages_url(base_url) == expected


class TestHeaders:
    """Request Header Construction Test"""

    def test_default_headers(self):
        client = MessagesClient(api_key="sk-ant-key", base_url="https://api.anthropic.com")
        headers = client.build_headers(_request())
        assert headers == {
            "x-api-key": "sk-ant-key",
            "anthropic-version": "2023-06-01",
            "content-type": "application/json",
        }

    def test_one_hour_cache_adds_beta(self):
        client = MessagesClient(api_key="sk-ant-key", base_url="https://api.anthropic.com")
        request = _request(messages=[Message.user(TextContentBlock.cached("context", CacheTtl.ONE_HOUR))])
        assert client.build_headers(request)["anthropic-beta"] == "extended-cache-ttl-2025-04-11"

    def test_five_minute_cache_omits_beta(self):
        client = MessagesClient(api_key="sk-ant-key", base_url="https://api.anthropic.com")
        request = _request(messages=[Message.user(TextContentBlock.cached("context"))])
        assert "anthropic-beta" not in client.build_headers(request)

    def test_configured_betas_are_merged(self):
        client = MessagesClient(
            api_key="sk-ant-key",
            base_url="https://api.anthropic.com",
            api_version="2024-01-01",
            betas=[Beta.TOOLS_2024_04_04, Beta.EXTENDED_CACHE_TTL_2025_04_11],
        )
        request = _request(messages=[Message.user(TextContentBlock.cached("context", CacheTtl.ONE_HOUR))])
        headers = client.build_headers(request)
        assert headers["anthropic-version"] == "2024-01-01"
        assert headers["anthropic-beta"] == "tools-2024-04-04,extended-cache-ttl-2025-04-11"


class TestConstruction:
    def test_empty_api_key(self):
        with pytest.raises(ConfigurationError):
            MessagesClient(api_key="")

    def test_from_env(self):
        settings = Settings(ANTHROPIC_API_KEY="sk-ant-env", ANTHROPIC_BASE_URL="https://env.example.com/v1")
        with patch("claude_messages.client.get_settings", return_value=settings):
            client = MessagesClient.from_env()
        assert client.api_key == "sk-ant-env"
        assert client.url == "https://env.example.com/v1/messages"

    def test_from_env_without_key(self):
        settings = Settings(ANTHROPIC_API_KEY=None)
        with patch("claude_messages.client.get_settings", return_value=settings):
            with pytest.raises(ConfigurationError) as exc_info:
                MessagesClient.from_env()
        assert exc_info.value.setting == "ANTHROPIC_API_KEY"


class TestCreateAMessage:
    """Non-streaming Call Test"""

    @pytest.mark.asyncio
    async def test_canned_response(self, make_client, canned_message):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["headers"] = request.headers
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=canned_message)

        async with make_client(handler) as client:
            response = await client.create_a_message(_request())

        assert captured["url"] == "https://api.anthropic.test/v1/messages"
        assert captured["headers"]["x-api-key"] == "sk-ant-test-0123456789"
        assert captured["headers"]["anthropic-version"] == "2023-06-01"
        assert "anthropic-beta" not in captured["headers"]
        assert captured["body"] == {
            "model": "claude-3-sonnet-20240229",
            "messages": [{"role": "user", "content": "Hello, Claude"}],
            "max_tokens": 1024,
        }

        expected = MessagesResponseBody.model_validate(canned_message)
        assert response.content == expected.content
        assert response.stop_reason is StopReason.END_TURN
        assert response == expected

    @pytest.mark.asyncio
    async def test_api_error(self, make_client, overloaded_error):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(529, json=overloaded_error)

        async with make_client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.create_a_message(_request())

        error = exc_info.value
        assert error.status_code == 529
        assert error.is_server_error
        assert error.error.error.type is ErrorType.OVERLOADED_ERROR
        assert error.api_error_type == "overloaded_error"

    @pytest.mark.asyncio
    async def test_unparseable_error_body(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        async with make_client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.create_a_message(_request())

        assert exc_info.value.error is None
        assert exc_info.value.api_error_type == "unknown"
        assert exc_info.value.body_text == "<html>Bad Gateway</html>"

    @pytest.mark.asyncio
    async def test_malformed_success_body(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        async with make_client(handler) as client:
            with pytest.raises(DecodeError):
                await client.create_a_message(_request())

    @pytest.mark.asyncio
    async def test_transport_error(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.create_a_message(_request())

        assert exc_info.value.url == "https://api.anthropic.test/v1/messages"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_client(handler) as client:
            with pytest.raises(TransportError):
                await client.create_a_message(_request())

    @pytest.mark.asyncio
    async def test_streaming_request_rejected(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        async with make_client(handler) as client:
            with pytest.raises(StreamOptionMismatch):
                await client.create_a_message(_request(stream=True))

    @pytest.mark.asyncio
    async def test_event_stream_reply_rejected(self, make_client, hello_stream):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers=SSE_HEADERS, content=hello_stream)

        async with make_client(handler) as client:
            with pytest.raises(StreamOptionMismatch):
                await client.create_a_message(_request())


class TestStreaming:
    """Streaming Call Test"""

    @pytest.mark.asyncio
    async def test_stream_events(self, make_client, hello_stream):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, headers=SSE_HEADERS, content=hello_stream)

        async with make_client(handler) as client:
            events = [event async for event in client.create_a_message_stream(_request(stream=True))]

        assert captured["body"]["stream"] is True
        assert isinstance(events[0], MessageStartEvent)
        assert isinstance(events[2], ContentBlockDeltaEvent)
        assert len(events) == 5

    @pytest.mark.asyncio
    async def test_collect_stream(self, make_client, tool_use_stream):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers=SSE_HEADERS, content=tool_use_stream)

        async with make_client(handler) as client:
            response = await client.collect_stream(_request(stream=True))

        assert response.text == "Let me check"
        assert response.tool_uses[0].input == {"location": "Paris"}
        assert response.stop_reason is StopReason.TOOL_USE

    @pytest.mark.asyncio
    async def test_non_streaming_request_rejected(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        async with make_client(handler) as client:
            with pytest.raises(StreamOptionMismatch):
                async for _ in client.create_a_message_stream(_request()):
                    pass

    @pytest.mark.asyncio
    async def test_json_reply_rejected(self, make_client, canned_message):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=canned_message)

        async with make_client(handler) as client:
            with pytest.raises(StreamOptionMismatch):
                await client.collect_stream(_request(stream=True))

    @pytest.mark.asyncio
    async def test_api_error_before_stream(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                401,
                json={"type": "error", "error": {"type": "authentication_error", "message": "invalid x-api-key"}},
            )

        async with make_client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.collect_stream(_request(stream=True))

        assert exc_info.value.status_code == 401
        assert exc_info.value.api_error_type == "authentication_error"

    @pytest.mark.asyncio
    async def test_error_event_mid_stream(self, make_client, encode_sse, hello_events, overloaded_error):
        body = encode_sse(*hello_events[0]) + encode_sse("error", overloaded_error)

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers=SSE_HEADERS, content=body)

        async with make_client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.collect_stream(_request(stream=True))

        assert exc_info.value.status_code is None
        assert exc_info.value.api_error_type == "overloaded_error"

    @pytest.mark.asyncio
    async def test_truncated_stream(self, make_client, hello_stream):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, headers=SSE_HEADERS, content=hello_stream[:-3])

        async with make_client(handler) as client:
            with pytest.raises(TruncatedStreamError):
                await client.collect_stream(_request(stream=True))
