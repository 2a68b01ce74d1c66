"""Beta capability identifiers sent in the anthropic-beta header."""

from enum import Enum


class Beta(str, Enum):
    """Beta features that can be enabled per request."""

    TOOLS_2024_04_04 = "tools-2024-04-04"
    EXTENDED_CACHE_TTL_2025_04_11 = "extended-cache-ttl-2025-04-11"

    @classmethod
    def default(cls) -> "Beta":
        return cls.TOOLS_2024_04_04

    def __str__(self) -> str:
        return self.value


def format_beta_header(betas) -> str:
    """Join betas into a header value, keeping first-seen order and dropping duplicates."""
    seen: list[str] = []
    for beta in betas:
        value = str(beta)
        if value not in seen:
            seen.append(value)
    return ",".join(seen)
