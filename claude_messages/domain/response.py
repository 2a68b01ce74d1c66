"""
Response Domain Model

Defines the Messages API response body, usage counters and the error body.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from claude_messages.domain.content import ContentBlock, TextContentBlock, ToolUseContentBlock
from claude_messages.domain.message import Role


class StopReason(str, Enum):
    """Why the model stopped generating."""

    END_TURN = "end_turn"
    MAX_TOKENS = "max_tokens"
    STOP_SEQUENCE = "stop_sequence"
    TOOL_USE = "tool_use"
    PAUSE_TURN = "pause_turn"
    REFUSAL = "refusal"

    def __str__(self) -> str:
        return self.value


# Stop reasons newer than StopReason are kept as plain strings
StopReasonValue = Annotated[Union[StopReason, str], Field(union_mode="left_to_right")]


class CacheCreation(BaseModel):
    """Breakdown of cache-creation input tokens by TTL."""

    ephemeral_5m_input_tokens: int = 0
    ephemeral_1h_input_tokens: int = 0


class Usage(BaseModel):
    """Billing and rate-limit usage."""

    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: Optional[int] = None
    cache_read_input_tokens: Optional[int] = None
    cache_creation: Optional[CacheCreation] = None


class MessagesResponseBody(BaseModel):
    """Messages API response body (non-streaming, or accumulated from a stream)."""

    id: str
    type: Literal["message"] = "message"
    role: Role = Role.ASSISTANT
    content: list[ContentBlock] = Field(default_factory=list)
    # Kept as a plain string so responses from newer models still parse
    model: str
    stop_reason: Optional[StopReasonValue] = None
    stop_sequence: Optional[str] = None
    usage: Usage = Field(default_factory=Usage)

    @property
    def text(self) -> str:
        """Concatenated text of all text blocks."""
        return "".join(
            block.text for block in self.content if isinstance(block, TextContentBlock)
        )

    @property
    def tool_uses(self) -> list[ToolUseContentBlock]:
        return [block for block in self.content if isinstance(block, ToolUseContentBlock)]

    def __str__(self) -> str:
        return self.model_dump_json(exclude_none=True)


class ErrorType(str, Enum):
    """Error types returned by the API."""

    INVALID_REQUEST_ERROR = "invalid_request_error"
    AUTHENTICATION_ERROR = "authentication_error"
    PERMISSION_ERROR = "permission_error"
    NOT_FOUND_ERROR = "not_found_error"
    REQUEST_TOO_LARGE = "request_too_large"
    RATE_LIMIT_ERROR = "rate_limit_error"
    API_ERROR = "api_error"
    OVERLOADED_ERROR = "overloaded_error"

    def __str__(self) -> str:
        return self.value


class ErrorDetail(BaseModel):
    """Error payload; unknown error types are kept as plain strings."""

    type: Union[ErrorType, str] = Field(union_mode="left_to_right")
    message: str


class ErrorResponseBody(BaseModel):
    """Error response body: {"type": "error", "error": {"type": ..., "message": ...}}."""

    type: Literal["error"] = "error"
    error: ErrorDetail
