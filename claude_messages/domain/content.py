"""
Content Block Domain Model

Tagged content block variants shared by requests and responses:
text, image, tool_use and tool_result. The "type" field is the discriminator;
blocks of any other type are kept as UnknownContentBlock.
"""

from enum import Enum
from os import PathLike
from pathlib import Path
from typing import Annotated, Any, Iterator, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from claude_messages.common.errors import ValidationError
from claude_messages.domain.cache_control import CacheControl, CacheTtl


class ImageMediaType(str, Enum):
    """Media types accepted for base64 image sources."""

    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"
    WEBP = "image/webp"

    @classmethod
    def from_path(cls, path: Union[str, PathLike]) -> "ImageMediaType":
        """
        Infer the media type from a file extension.

        Raises:
            ValidationError: The extension is not a supported image type
        """
        suffix = Path(path).suffix.lower().lstrip(".")
        media_type = _EXTENSION_MEDIA_TYPES.get(suffix)
        if media_type is None:
            raise ValidationError(
                "media_type",
                f"unsupported image extension '{suffix}'",
                value=str(path),
                expected="jpg, jpeg, png, gif or webp",
            )
        return media_type

    def __str__(self) -> str:
        return self.value


_EXTENSION_MEDIA_TYPES = {
    "jpg": ImageMediaType.JPEG,
    "jpeg": ImageMediaType.JPEG,
    "png": ImageMediaType.PNG,
    "gif": ImageMediaType.GIF,
    "webp": ImageMediaType.WEBP,
}


class _ContentBlockBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    cache_control: Optional[CacheControl] = None

    def cache_controls(self) -> Iterator[CacheControl]:
        """Yield every cache directive carried by this block (nested ones included)."""
        if self.cache_control is not None:
            yield self.cache_control


class TextContentBlock(_ContentBlockBase):
    """Text content block."""

    type: Literal["text"] = "text"
    text: str

    @classmethod
    def cached(cls, text: str, ttl: Optional[CacheTtl] = None) -> "TextContentBlock":
        """Text block marked for ephemeral prompt caching."""
        return cls(text=text, cache_control=CacheControl.ephemeral(ttl))

    def __str__(self) -> str:
        return self.text


class ImageContentSource(BaseModel):
    """Base64 image payload."""

    model_config = ConfigDict(frozen=True)

    type: Literal["base64"] = "base64"
    media_type: ImageMediaType
    data: str

    @classmethod
    def base64(cls, media_type: ImageMediaType, data: str) -> "ImageContentSource":
        return cls(media_type=media_type, data=data)


class ImageContentBlock(_ContentBlockBase):
    """Image content block."""

    type: Literal["image"] = "image"
    source: ImageContentSource


class ToolUseContentBlock(_ContentBlockBase):
    """Tool invocation requested by the model."""

    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: dict[str, Any] = Field(default_factory=dict)


ToolResultContent = Annotated[
    Union[TextContentBlock, ImageContentBlock],
    Field(discriminator="type"),
]


class ToolResultContentBlock(_ContentBlockBase):
    """Result of a tool invocation, sent back by the caller."""

    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str
    content: Optional[Union[str, list[ToolResultContent]]] = None
    is_error: Optional[bool] = None

    def cache_controls(self) -> Iterator[CacheControl]:
        yield from super().cache_controls()
        if isinstance(self.content, list):
            for block in self.content:
                yield from block.cache_controls()


class UnknownContentBlock(_ContentBlockBase):
    """
    A content block type this client does not model (e.g. thinking).

    The fields beyond "type" are kept as-is in model_extra and are sent back
    unchanged when the block is replayed in a later request.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    type: str


_KNOWN_BLOCK_TYPES = frozenset({"text", "image", "tool_use", "tool_result"})


def _block_tag(value: Any) -> str:
    tag = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return tag if tag in _KNOWN_BLOCK_TYPES else "unknown"


ContentBlock = Annotated[
    Union[
        Annotated[TextContentBlock, Tag("text")],
        Annotated[ImageContentBlock, Tag("image")],
        Annotated[ToolUseContentBlock, Tag("tool_use")],
        Annotated[ToolResultContentBlock, Tag("tool_result")],
        Annotated[UnknownContentBlock, Tag("unknown")],
    ],
    Discriminator(_block_tag),
]
