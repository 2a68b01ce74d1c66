"""
Data Sanitization Module

Masks credentials in outbound request headers so debug logs never contain
the API key in plain text.
"""

from collections.abc import Mapping
from typing import Any, Optional

# Header names (lowercase) whose values are credentials
SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key", "api-key"})


def mask_secret(value: Optional[str]) -> Optional[str]:
    """
    Mask a credential, keeping a short prefix and suffix for identification.

    Examples:
        >>> mask_secret("sk-ant-api03-abcdefghijkl")
        'sk-a***...***kl'
        >>> mask_secret("short")
        '***'
    """
    if not value:
        return value

    prefix = ""
    token = value
    if value.lower().startswith("bearer "):
        prefix = "Bearer "
        token = value[7:]

    if len(token) <= 8:
        return f"{prefix}***"

    return f"{prefix}{token[:4]}***...***{token[-2:]}"


def sanitize_headers(headers: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """
    Return a copy of headers with credential values masked.

    Examples:
        >>> sanitize_headers({"x-api-key": "sk-ant-1234567890", "anthropic-version": "2023-06-01"})
        {'x-api-key': 'sk-a***...***90', 'anthropic-version': '2023-06-01'}
    """
    if not headers:
        return {}

    sanitized = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS and isinstance(value, str):
            sanitized[key] = mask_secret(value)
        else:
            sanitized[key] = value
    return sanitized
