"""
Cache Control Domain Model

Prompt-caching directives attached to content blocks, system blocks and tools.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CacheControlType(str, Enum):
    """The type of cache control."""

    # The content will be cached temporarily
    EPHEMERAL = "ephemeral"

    def __str__(self) -> str:
        return self.value


class CacheTtl(str, Enum):
    """Time to live for a cache entry."""

    FIVE_MINUTES = "5m"
    # Requires the extended-cache-ttl beta header
    ONE_HOUR = "1h"

    def __str__(self) -> str:
        return self.value


class CacheControl(BaseModel):
    """
    Cache control for a content block.

    Serializes as {"type": "ephemeral"} or {"type": "ephemeral", "ttl": "1h"}.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: CacheControlType = Field(CacheControlType.EPHEMERAL, description="Cache control type")
    ttl: Optional[CacheTtl] = Field(None, description="Cache entry time to live")

    @classmethod
    def ephemeral(cls, ttl: Optional[CacheTtl] = None) -> "CacheControl":
        return cls(type=CacheControlType.EPHEMERAL, ttl=ttl)

    @property
    def is_one_hour(self) -> bool:
        return self.ttl == CacheTtl.ONE_HOUR

    def __str__(self) -> str:
        return self.model_dump_json(exclude_none=True)
