"""
Error Definitions

Defines the exception classes raised by the client, one per failure kind, so callers
can tell validation, vendor, transport and stream problems apart.

None of these subclass ValueError: pydantic only wraps ValueError/AssertionError raised
inside validators, so our errors surface from model construction unchanged.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from claude_messages.domain.response import ErrorResponseBody


class ClaudeMessagesError(Exception):
    """
    Client Base Exception

    Base class for all custom exceptions, containing error message, type and details.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "client_error",
        details: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            details: Extra error details
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary format (for logging / reporting)

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "type": self.error_type,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class ValidationError(ClaudeMessagesError):
    """
    Parameter Validation Error

    Raised when a constructed value violates its declared bound, e.g.
    temperature > 1.0 or max_tokens above the model limit.
    """

    def __init__(
        self,
        field: str,
        message: str,
        value: Any = None,
        expected: Optional[str] = None,
    ):
        details: dict[str, Any] = {"field": field}
        if value is not None:
            details["value"] = repr(value)
        if expected:
            details["expected"] = expected
        super().__init__(
            message=f"Validation error for '{field}': {message}",
            error_type="validation_error",
            details=details,
        )
        self.field = field
        self.value = value
        self.expected = expected


class ConfigurationError(ClaudeMessagesError):
    """
    Configuration Error

    Raised when a required setting (e.g. the API key) is missing.
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(
            message=message,
            error_type="configuration_error",
            details={"setting": setting} if setting else None,
        )
        self.setting = setting


class ApiError(ClaudeMessagesError):
    """
    Vendor API Error

    Raised when the API returns a non-2xx status, or when a stream carries an
    error event. `error` holds the structured body when it could be parsed.
    """

    def __init__(
        self,
        status_code: Optional[int],
        error: Optional["ErrorResponseBody"] = None,
        body_text: Optional[str] = None,
    ):
        if error is not None:
            api_type = str(error.error.type)
            message = error.error.message
        else:
            api_type = "unknown"
            message = body_text or "Unknown API error"
        # Stream error events carry no HTTP status
        prefix = f"API error ({status_code})" if status_code is not None else "API error"
        super().__init__(
            message=f"{prefix} {api_type}: {message}",
            error_type="api_error",
            details={"status_code": status_code, "api_error_type": api_type},
        )
        self.status_code = status_code
        self.error = error
        self.body_text = body_text
        self.api_error_type = api_type

    @property
    def is_server_error(self) -> bool:
        """Whether it is a server error (status code >= 500)"""
        return self.status_code is not None and self.status_code >= 500


class TransportError(ClaudeMessagesError):
    """
    Transport Error

    Raised on connection, timeout or read failures talking to the API.
    """

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(
            message=message,
            error_type="transport_error",
            details={"url": url} if url else None,
        )
        self.url = url


class DecodeError(ClaudeMessagesError):
    """
    Decode Error

    Raised when a response body or stream event payload is not valid JSON or
    does not match the schema implied by its type tag.
    """

    def __init__(
        self,
        message: str,
        event_type: Optional[str] = None,
        payload: Optional[str] = None,
    ):
        details: dict[str, Any] = {}
        if event_type:
            details["event_type"] = event_type
        if payload is not None:
            details["payload"] = payload
        super().__init__(message=message, error_type="decode_error", details=details)
        self.event_type = event_type
        self.payload = payload


class ProtocolOrderError(ClaudeMessagesError):
    """
    Stream Ordering Error

    Raised when stream events violate the open/delta/close order of content
    blocks or of the message itself.
    """

    def __init__(
        self,
        message: str,
        event_type: Optional[str] = None,
        index: Optional[int] = None,
    ):
        details: dict[str, Any] = {}
        if event_type:
            details["event_type"] = event_type
        if index is not None:
            details["index"] = index
        super().__init__(message=message, error_type="protocol_order_error", details=details)
        self.event_type = event_type
        self.index = index


class TruncatedStreamError(ClaudeMessagesError):
    """
    Truncated Stream Error

    Raised when the stream ends while a partial event is still buffered.
    """

    def __init__(self, remaining: bytes):
        super().__init__(
            message=f"Stream ended with {len(remaining)} bytes of an incomplete event",
            error_type="truncated_stream_error",
            details={"remaining": remaining[:200].decode("utf-8", errors="replace")},
        )
        self.remaining = remaining


class StreamOptionMismatch(ClaudeMessagesError):
    """
    Stream Option Mismatch

    Raised when a streaming call is made with a non-streaming request (or
    response), or a non-streaming call with a streaming request.
    """

    def __init__(self, message: str):
        super().__init__(message=message, error_type="stream_option_mismatch")
