"""
System Prompt Domain Model

A system prompt is either a plain string or a list of text blocks, where each block
may carry its own cache directive.
"""

from typing import Iterable, Iterator, Optional, Union

from pydantic import ConfigDict, RootModel

from claude_messages.domain.cache_control import CacheControl
from claude_messages.domain.content import TextContentBlock


class SystemPrompt(RootModel[Union[str, list[TextContentBlock]]]):
    """
    System prompt.

    Examples:
        SystemPrompt("You are a helpful assistant.")
        SystemPrompt.from_text_blocks_with_cache_control([
            ("You are an AI assistant analyzing literary works.", None),
            ("<the entire contents of Pride and Prejudice>", CacheControl.ephemeral()),
        ])
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_text_blocks(cls, texts: Iterable[str]) -> "SystemPrompt":
        return cls([TextContentBlock(text=text) for text in texts])

    @classmethod
    def from_text_blocks_with_cache_control(
        cls,
        texts_with_cache: Iterable[tuple[str, Optional[CacheControl]]],
    ) -> "SystemPrompt":
        return cls(
            [
                TextContentBlock(text=text, cache_control=cache_control)
                for text, cache_control in texts_with_cache
            ]
        )

    @classmethod
    def from_content_blocks(cls, blocks: Iterable[TextContentBlock]) -> "SystemPrompt":
        return cls(list(blocks))

    @property
    def is_simple(self) -> bool:
        return isinstance(self.root, str)

    def cache_controls(self) -> Iterator[CacheControl]:
        if not self.is_simple:
            for block in self.root:
                yield from block.cache_controls()

    def __str__(self) -> str:
        if self.is_simple:
            return self.root
        return "\n".join(block.text for block in self.root)
