"""
Domain Models

Typed representations of the Messages API request, response and stream event JSON.
"""

from .beta import Beta
from .cache_control import CacheControl, CacheControlType, CacheTtl
from .content import (
    ContentBlock,
    ImageContentBlock,
    ImageContentSource,
    ImageMediaType,
    TextContentBlock,
    ToolResultContentBlock,
    ToolUseContentBlock,
    UnknownContentBlock,
)
from .message import Message, Role
from .model import ClaudeModel
from .parameters import MaxTokens, Metadata, Temperature, TopK, TopP
from .request import MessagesRequestBody
from .response import (
    CacheCreation,
    ErrorDetail,
    ErrorResponseBody,
    ErrorType,
    MessagesResponseBody,
    StopReason,
    Usage,
)
from .stream_event import (
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    ContentBlockStopEvent,
    ErrorEvent,
    InputJsonDelta,
    MessageDelta,
    MessageDeltaEvent,
    MessageDeltaUsage,
    MessageStartEvent,
    MessageStopEvent,
    PingEvent,
    StreamEvent,
    TextDelta,
    UnknownDelta,
    UnknownEvent,
)
from .system_prompt import SystemPrompt
from .tool import ToolChoice, ToolChoiceAny, ToolChoiceAuto, ToolChoiceTool, ToolDefinition

__all__ = [
    "Beta",
    "CacheControl",
    "CacheControlType",
    "CacheTtl",
    "ContentBlock",
    "ImageContentBlock",
    "ImageContentSource",
    "ImageMediaType",
    "TextContentBlock",
    "ToolResultContentBlock",
    "ToolUseContentBlock",
    "UnknownContentBlock",
    "Message",
    "Role",
    "ClaudeModel",
    "MaxTokens",
    "Metadata",
    "Temperature",
    "TopK",
    "TopP",
    "MessagesRequestBody",
    "CacheCreation",
    "ErrorDetail",
    "ErrorResponseBody",
    "ErrorType",
    "MessagesResponseBody",
    "StopReason",
    "Usage",
    "ContentBlockDeltaEvent",
    "ContentBlockStartEvent",
    "ContentBlockStopEvent",
    "ErrorEvent",
    "InputJsonDelta",
    "MessageDelta",
    "MessageDeltaEvent",
    "MessageDeltaUsage",
    "MessageStartEvent",
    "MessageStopEvent",
    "PingEvent",
    "StreamEvent",
    "TextDelta",
    "UnknownDelta",
    "UnknownEvent",
    "SystemPrompt",
    "ToolChoice",
    "ToolChoiceAny",
    "ToolChoiceAuto",
    "ToolChoiceTool",
    "ToolDefinition",
]
