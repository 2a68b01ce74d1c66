"""
Tool Domain Model

Tool definitions offered to the model and the tool_choice directive.
"""

from typing import Annotated, Any, Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from claude_messages.domain.cache_control import CacheControl


class ToolDefinition(BaseModel):
    """A tool the model may call, described by a JSON schema of its input."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: Optional[str] = None
    input_schema: dict[str, Any] = Field(default_factory=lambda: {"type": "object"})
    cache_control: Optional[CacheControl] = None

    def cache_controls(self) -> Iterator[CacheControl]:
        if self.cache_control is not None:
            yield self.cache_control


class ToolChoiceAuto(BaseModel):
    """Let the model decide whether to use tools."""

    model_config = ConfigDict(frozen=True)

    type: Literal["auto"] = "auto"
    disable_parallel_tool_use: Optional[bool] = None


class ToolChoiceAny(BaseModel):
    """The model must use one of the provided tools."""

    model_config = ConfigDict(frozen=True)

    type: Literal["any"] = "any"
    disable_parallel_tool_use: Optional[bool] = None


class ToolChoiceTool(BaseModel):
    """The model must use the named tool."""

    model_config = ConfigDict(frozen=True)

    type: Literal["tool"] = "tool"
    name: str
    disable_parallel_tool_use: Optional[bool] = None


ToolChoice = Annotated[
    Union[ToolChoiceAuto, ToolChoiceAny, ToolChoiceTool],
    Field(discriminator="type"),
]
