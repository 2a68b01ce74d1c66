"""
Message Domain Model

One conversational turn: a role plus either a plain string or a list of content blocks.
"""

from enum import Enum
from typing import Iterator, Union

from pydantic import BaseModel, ConfigDict

from claude_messages.domain.cache_control import CacheControl
from claude_messages.domain.content import ContentBlock


class Role(str, Enum):
    """The role of a message author."""

    USER = "user"
    ASSISTANT = "assistant"

    def __str__(self) -> str:
        return self.value


MessageContent = Union[str, list[ContentBlock]]


class Message(BaseModel):
    """A single input message."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: MessageContent

    @classmethod
    def user(cls, content) -> "Message":
        return cls(role=Role.USER, content=_as_content(content))

    @classmethod
    def assistant(cls, content) -> "Message":
        return cls(role=Role.ASSISTANT, content=_as_content(content))

    def cache_controls(self) -> Iterator[CacheControl]:
        # A plain string carries no cache directive
        if isinstance(self.content, list):
            for block in self.content:
                yield from block.cache_controls()


def _as_content(content) -> MessageContent:
    if isinstance(content, (str, list)):
        return content
    return [content]
