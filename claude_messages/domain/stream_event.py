"""
Stream Event Domain Model

One model per server-sent event type of a streaming Messages response.
Event, content block and delta types the client does not know are passed
through as UnknownEvent, UnknownContentBlock and UnknownDelta.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from claude_messages.domain.content import ContentBlock
from claude_messages.domain.response import ErrorDetail, MessagesResponseBody, StopReasonValue


class TextDelta(BaseModel):
    type: Literal["text_delta"] = "text_delta"
    text: str


class InputJsonDelta(BaseModel):
    """Fragment of a tool_use block's input JSON."""

    type: Literal["input_json_delta"] = "input_json_delta"
    partial_json: str


class UnknownDelta(BaseModel):
    """A delta type this client does not model (e.g. signature_delta), kept with its raw fields."""

    model_config = ConfigDict(extra="allow")

    type: str


_KNOWN_DELTA_TYPES = frozenset({"text_delta", "input_json_delta"})


def _delta_tag(value: Any) -> str:
    tag = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return tag if tag in _KNOWN_DELTA_TYPES else "unknown"


ContentBlockDelta = Annotated[
    Union[
        Annotated[TextDelta, Tag("text_delta")],
        Annotated[InputJsonDelta, Tag("input_json_delta")],
        Annotated[UnknownDelta, Tag("unknown")],
    ],
    Discriminator(_delta_tag),
]


class MessageStartEvent(BaseModel):
    """First event: the message envelope with empty content."""

    type: Literal["message_start"] = "message_start"
    message: MessagesResponseBody


class ContentBlockStartEvent(BaseModel):
    type: Literal["content_block_start"] = "content_block_start"
    index: int
    content_block: ContentBlock


class ContentBlockDeltaEvent(BaseModel):
    type: Literal["content_block_delta"] = "content_block_delta"
    index: int
    delta: ContentBlockDelta


class ContentBlockStopEvent(BaseModel):
    type: Literal["content_block_stop"] = "content_block_stop"
    index: int


class MessageDelta(BaseModel):
    stop_reason: Optional[StopReasonValue] = None
    stop_sequence: Optional[str] = None


class MessageDeltaUsage(BaseModel):
    """Cumulative usage counters reported near the end of the stream."""

    output_tokens: int = 0
    input_tokens: Optional[int] = None
    cache_creation_input_tokens: Optional[int] = None
    cache_read_input_tokens: Optional[int] = None


class MessageDeltaEvent(BaseModel):
    """Top-level message changes: stop reason and usage."""

    type: Literal["message_delta"] = "message_delta"
    delta: MessageDelta = Field(default_factory=MessageDelta)
    usage: Optional[MessageDeltaUsage] = None


class MessageStopEvent(BaseModel):
    type: Literal["message_stop"] = "message_stop"


class PingEvent(BaseModel):
    type: Literal["ping"] = "ping"


class ErrorEvent(BaseModel):
    """Error reported inside an otherwise successful stream (e.g. overloaded_error)."""

    type: Literal["error"] = "error"
    error: ErrorDetail


class UnknownEvent(BaseModel):
    """An event type this client does not recognize, passed through undecoded."""

    type: Literal["unknown"] = "unknown"
    event_type: str
    data: Any = None


# Event tag -> model used to decode its payload
KNOWN_EVENT_TYPES: dict[str, type[BaseModel]] = {
    "message_start": MessageStartEvent,
    "content_block_start": ContentBlockStartEvent,
    "content_block_delta": ContentBlockDeltaEvent,
    "content_block_stop": ContentBlockStopEvent,
    "message_delta": MessageDeltaEvent,
    "message_stop": MessageStopEvent,
    "ping": PingEvent,
    "error": ErrorEvent,
}

StreamEvent = Union[
    MessageStartEvent,
    ContentBlockStartEvent,
    ContentBlockDeltaEvent,
    ContentBlockStopEvent,
    MessageDeltaEvent,
    MessageStopEvent,
    PingEvent,
    ErrorEvent,
    UnknownEvent,
]
