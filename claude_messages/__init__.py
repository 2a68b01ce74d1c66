"""
claude-messages

Typed asynchronous client for the Anthropic Messages API.
"""

from claude_messages.client import MessagesClient, build_messages_url
from claude_messages.common.errors import (
    ApiError,
    ClaudeMessagesError,
    ConfigurationError,
    DecodeError,
    ProtocolOrderError,
    StreamOptionMismatch,
    TransportError,
    TruncatedStreamError,
    ValidationError,
)
from claude_messages.stream import StreamAccumulator, decode_stream, iter_events

__version__ = "0.1.0"

__all__ = [
    "MessagesClient",
    "build_messages_url",
    "StreamAccumulator",
    "decode_stream",
    "iter_events",
    "ClaudeMessagesError",
    "ValidationError",
    "ConfigurationError",
    "ApiError",
    "TransportError",
    "DecodeError",
    "ProtocolOrderError",
    "TruncatedStreamError",
    "StreamOptionMismatch",
]
