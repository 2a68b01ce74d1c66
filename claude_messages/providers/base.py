"""
Messages Transport Base Class

Defines the interface between MessagesClient and the HTTP layer, and the mapping of
vendor error bodies to ApiError.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Optional

from pydantic import ValidationError as PydanticValidationError

from claude_messages.common.errors import ApiError
from claude_messages.domain.response import ErrorResponseBody


@dataclass
class ProviderResponse:
    """
    Provider Response Data Class

    A fully read, non-streaming HTTP response.
    """

    # HTTP status code
    status_code: int
    # Response headers (lowercase keys)
    headers: dict[str, str] = field(default_factory=dict)
    # Response body text
    body: str = ""
    # Time to first byte (ms)
    first_byte_delay_ms: Optional[int] = None
    # Total time (ms)
    total_time_ms: Optional[int] = None

    @property
    def is_success(self) -> bool:
        """Whether the response is successful"""
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")


class MessagesTransport(ABC):
    """
    Transport Abstract Base Class

    Sends one serialized request and hands back either the full response or the
    raw byte stream. Implementations raise TransportError for connection failures.
    """

    @abstractmethod
    async def send_once(
        self,
        url: str,
        headers: dict[str, str],
        body: dict[str, Any],
    ) -> ProviderResponse:
        """
        Send a request and read the whole response.

        Args:
            url: Endpoint URL
            headers: Request headers
            body: JSON request body

        Returns:
            ProviderResponse: Response of any status; the caller maps errors
        """

    @abstractmethod
    def send_streaming(
        self,
        url: str,
        headers: dict[str, str],
        body: dict[str, Any],
    ) -> AsyncIterator[bytes]:
        """
        Send a request and yield the response body as it arrives.

        Raises:
            ApiError: Non-2xx status (raised before any chunk is yielded)
            StreamOptionMismatch: 2xx response that is not text/event-stream
            TransportError: Connection or read failure

        Yields:
            bytes: Raw body chunks
        """

    async def aclose(self) -> None:
        """Release transport resources."""


def parse_api_error(status_code: Optional[int], text: str) -> ApiError:
    """
    Build an ApiError from an error response body.

    Bodies that are not the documented {"type": "error", "error": {...}} shape
    (e.g. an HTML page from a proxy) are kept as raw text.
    """
    try:
        error = ErrorResponseBody.model_validate_json(text)
    except PydanticValidationError:
        return ApiError(status_code=status_code, body_text=text)
    return ApiError(status_code=status_code, error=error, body_text=text)


def dumps_body(body: dict[str, Any]) -> str:
    """Serialize a request body for debug logging."""
    return json.dumps(body, ensure_ascii=False)
