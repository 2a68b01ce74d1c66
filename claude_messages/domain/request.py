"""
Request Domain Model

MessagesRequestBody describes one call to the Messages endpoint. It is immutable and
validated when constructed: bounded parameters, the model identifier and the
model-specific max_tokens limit are all checked before anything is sent.
"""

from typing import Any, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from claude_messages.common.errors import ValidationError
from claude_messages.domain.cache_control import CacheControl
from claude_messages.domain.message import Message
from claude_messages.domain.model import ClaudeModel
from claude_messages.domain.parameters import MaxTokens, Metadata, Temperature, TopK, TopP
from claude_messages.domain.system_prompt import SystemPrompt
from claude_messages.domain.tool import ToolChoice, ToolDefinition


class MessagesRequestBody(BaseModel):
    """
    Messages API request body.

    Example:
        body = MessagesRequestBody(
            model=ClaudeModel.CLAUDE_35_HAIKU_20241022,
            max_tokens=1024,
            messages=[Message.user("Hello, Claude")],
            temperature=0.2,
        )
        streaming_body = body.replace(stream=True)
    """

    model_config = ConfigDict(frozen=True)

    model: ClaudeModel = Field(default_factory=ClaudeModel.default)
    messages: list[Message] = Field(default_factory=list)
    max_tokens: MaxTokens
    system: Optional[SystemPrompt] = None
    metadata: Optional[Metadata] = None
    stop_sequences: Optional[list[str]] = None
    stream: Optional[bool] = None
    temperature: Optional[Temperature] = None
    top_p: Optional[TopP] = None
    top_k: Optional[TopK] = None
    tools: Optional[list[ToolDefinition]] = None
    tool_choice: Optional[ToolChoice] = None

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "request"
            raise ValidationError(field, first["msg"], value=first.get("input")) from e

    @field_validator("model", mode="before")
    @classmethod
    def _validate_model(cls, value: Any) -> ClaudeModel:
        if isinstance(value, ClaudeModel):
            return value
        try:
            return ClaudeModel(value)
        except ValueError as e:
            raise ValidationError(
                "model",
                f"unknown model '{value}'",
                value=value,
                expected=", ".join(m.value for m in ClaudeModel),
            ) from e

    @model_validator(mode="after")
    def _check_max_tokens_for_model(self) -> "MessagesRequestBody":
        self.max_tokens.check_model(self.model)
        return self

    @property
    def is_stream(self) -> bool:
        return bool(self.stream)

    def replace(self, **changes: Any) -> "MessagesRequestBody":
        """Return a copy with the given fields changed, validated like a new request."""
        values = {name: getattr(self, name) for name in type(self).model_fields}
        values.update(changes)
        return type(self)(**values)

    def to_json_dict(self) -> dict[str, Any]:
        """Wire representation with unset optional fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)

    def cache_controls(self) -> Iterator[CacheControl]:
        """Yield every cache directive in messages, system blocks and tools."""
        for message in self.messages:
            yield from message.cache_controls()
        if self.system is not None:
            yield from self.system.cache_controls()
        for tool in self.tools or []:
            yield from tool.cache_controls()

    def uses_one_hour_cache(self) -> bool:
        """Whether the extended-cache-ttl beta header is required."""
        return any(cache_control.is_one_hour for cache_control in self.cache_controls())
