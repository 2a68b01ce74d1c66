"""
Common Utilities Module
"""

from claude_messages.common.errors import ClaudeMessagesError
from claude_messages.common.http_client import HttpClient
from claude_messages.common.sanitizer import mask_secret, sanitize_headers
from claude_messages.common.timer import Timer

__all__ = [
    "ClaudeMessagesError",
    "HttpClient",
    "mask_secret",
    "sanitize_headers",
    "Timer",
]
