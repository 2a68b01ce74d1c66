"""
Test Configuration Module

Shared canned payloads and client factories for the unit tests.
"""

import json
from typing import Callable

import httpx
import pytest

from claude_messages.client import MessagesClient
from claude_messages.common.http_client import HttpClient
from claude_messages.providers.anthropic_client import AnthropicTransport

TEST_API_KEY = "sk-ant-test-0123456789"
TEST_BASE_URL = "https://api.anthropic.test"


def sse(event: str, payload: dict) -> bytes:
    """Encode one server-sent event block."""
    return f"event: {event}\ndata: {json.dumps(payload)}\n\n".encode("utf-8")


CANNED_MESSAGE = {
    "id": "msg_01XFDUDYJgAACzvnptvVoYEL",
    "type": "message",
    "role": "assistant",
    "content": [{"type": "text", "text": "Hello! How can I help you today?"}],
    "model": "claude-3-5-haiku-20241022",
    "stop_reason": "end_turn",
    "stop_sequence": None,
    "usage": {"input_tokens": 12, "output_tokens": 11},
}

MESSAGE_START = {
    "type": "message_start",
    "message": {
        "id": "msg_stream_1",
        "type": "message",
        "role": "assistant",
        "content": [],
        "model": "claude-3-5-haiku-20241022",
        "stop_reason": None,
        "stop_sequence": None,
        "usage": {"input_tokens": 25, "output_tokens": 1},
    },
}

HELLO_EVENTS = [
    ("message_start", MESSAGE_START),
    (
        "content_block_start",
        {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}},
    ),
    (
        "content_block_delta",
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Hello"}},
    ),
    ("content_block_stop", {"type": "content_block_stop", "index": 0}),
    ("message_stop", {"type": "message_stop"}),
]

TOOL_USE_EVENTS = [
    ("message_start", MESSAGE_START),
    (
        "content_block_start",
        {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}},
    ),
    (
        "content_block_delta",
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Let me check"}},
    ),
    ("content_block_stop", {"type": "content_block_stop", "index": 0}),
    ("ping", {"type": "ping"}),
    (
        "content_block_start",
        {
            "type": "content_block_start",
            "index": 1,
            "content_block": {"type": "tool_use", "id": "toolu_01", "name": "get_weather", "input": {}},
        },
    ),
    (
        "content_block_delta",
        {"type": "content_block_delta", "index": 1, "delta": {"type": "input_json_delta", "partial_json": '{"locat'}},
    ),
    (
        "content_block_delta",
        {"type": "content_block_delta", "index": 1, "delta": {"type": "input_json_delta", "partial_json": 'ion": "Paris"}'}},
    ),
    ("content_block_stop", {"type": "content_block_stop", "index": 1}),
    (
        "message_delta",
        {"type": "message_delta", "delta": {"stop_reason": "tool_use", "stop_sequence": None}, "usage": {"output_tokens": 42}},
    ),
    ("message_stop", {"type": "message_stop"}),
]

OVERLOADED_ERROR = {
    "type": "error",
    "error": {"type": "overloaded_error", "message": "Overloaded"},
}


@pytest.fixture
def encode_sse() -> Callable[[str, dict], bytes]:
    return sse


@pytest.fixture
def hello_events() -> list[tuple[str, dict]]:
    return json.loads(json.dumps(HELLO_EVENTS))


@pytest.fixture
def tool_use_events() -> list[tuple[str, dict]]:
    return json.loads(json.dumps(TOOL_USE_EVENTS))


@pytest.fixture
def overloaded_error() -> dict:
    return json.loads(json.dumps(OVERLOADED_ERROR))


@pytest.fixture
def canned_message() -> dict:
    return json.loads(json.dumps(CANNED_MESSAGE))


@pytest.fixture
def hello_stream() -> bytes:
    return b"".join(sse(event, payload) for event, payload in HELLO_EVENTS)


@pytest.fixture
def tool_use_stream() -> bytes:
    return b"".join(sse(event, payload) for event, payload in TOOL_USE_EVENTS)


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], MessagesClient]:
    """Build a MessagesClient whose HTTP traffic is served by the given handler."""

    def _make(handler, **kwargs) -> MessagesClient:
        http_client = HttpClient(transport=httpx.MockTransport(handler))
        kwargs.setdefault("base_url", TEST_BASE_URL)
        return MessagesClient(
            api_key=TEST_API_KEY,
            transport=AnthropicTransport(http_client=http_client),
            **kwargs,
        )

    return _make
