"""
Messages API Client

Public entry point: builds the endpoint URL and headers for a request, sends it
through a MessagesTransport, and maps the reply to typed results or errors.
"""

import logging
from contextlib import aclosing
from typing import AsyncIterator, Iterable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from claude_messages.common.errors import (
    ConfigurationError,
    DecodeError,
    StreamOptionMismatch,
)
from claude_messages.config import get_settings
from claude_messages.domain.beta import Beta, format_beta_header
from claude_messages.domain.request import MessagesRequestBody
from claude_messages.domain.response import MessagesResponseBody
from claude_messages.domain.stream_event import StreamEvent
from claude_messages.providers.anthropic_client import (
    EVENT_STREAM_CONTENT_TYPE,
    AnthropicTransport,
)
from claude_messages.providers.base import MessagesTransport, parse_api_error
from claude_messages.stream.accumulator import StreamAccumulator
from claude_messages.stream.decoder import decode_stream

logger = logging.getLogger(__name__)


def build_messages_url(base_url: str) -> str:
    """
    Build the Messages endpoint URL

    Handles the case where base_url already contains the /v1 suffix.

    Args:
        base_url: API base URL, e.g. https://api.anthropic.com or https://proxy/v1

    Returns:
        str: Full endpoint URL
    """
    base = base_url.rstrip("/")
    if base.endswith("/v1"):
        return f"{base}/messages"
    return f"{base}/v1/messages"


class MessagesClient:
    """
    Client for the Messages endpoint.

    Example:
        async with MessagesClient.from_env() as client:
            response = await client.create_a_message(body)
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        betas: Optional[Iterable[Union[Beta, str]]] = None,
        timeout: Optional[int] = None,
        transport: Optional[MessagesTransport] = None,
    ):
        """
        Initialize the client

        Args:
            api_key: Vendor API key
            base_url: API base URL, defaults to configuration
            api_version: anthropic-version header value, defaults to configuration
            betas: Beta features sent with every request
            timeout: Request timeout (seconds), defaults to configuration
            transport: Transport implementation, defaults to AnthropicTransport
        """
        if not api_key:
            raise ConfigurationError("API key is required", setting="ANTHROPIC_API_KEY")

        settings = get_settings()
        self.api_key = api_key
        self.base_url = base_url or settings.ANTHROPIC_BASE_URL
        self.api_version = api_version or settings.ANTHROPIC_VERSION
        self.betas: list[Union[Beta, str]] = list(betas or [])
        self.url = build_messages_url(self.base_url)
        self._transport = transport or AnthropicTransport(timeout=timeout)

    @classmethod
    def from_env(cls, **kwargs) -> "MessagesClient":
        """
        Create a client from settings (environment variables or .env)

        Raises:
            ConfigurationError: ANTHROPIC_API_KEY is not set
        """
        settings = get_settings()
        if not settings.ANTHROPIC_API_KEY:
            raise ConfigurationError(
                "ANTHROPIC_API_KEY is not set", setting="ANTHROPIC_API_KEY"
            )
        return cls(api_key=settings.ANTHROPIC_API_KEY, **kwargs)

    def build_headers(self, request: MessagesRequestBody) -> dict[str, str]:
        """
        Build request headers

        The extended cache TTL beta is added when any cache directive in the
        request asks for a one hour TTL.
        """
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
            "content-type": "application/json",
        }
        betas = list(self.betas)
        if request.uses_one_hour_cache():
            betas.append(Beta.EXTENDED_CACHE_TTL_2025_04_11)
        beta_header = format_beta_header(betas)
        if beta_header:
            headers["anthropic-beta"] = beta_header
        return headers

    async def create_a_message(self, request: MessagesRequestBody) -> MessagesResponseBody:
        """
        Send a non-streaming request

        Raises:
            StreamOptionMismatch: request.stream is true, or the reply is an event stream
            ApiError: Non-2xx response
            DecodeError: 2xx body does not match MessagesResponseBody
            TransportError: Connection failure
        """
        if request.is_stream:
            raise StreamOptionMismatch(
                "create_a_message() requires stream to be unset or false; "
                "use create_a_message_stream()"
            )

        response = await self._transport.send_once(
            self.url, self.build_headers(request), request.to_json_dict()
        )
        if not response.is_success:
            raise parse_api_error(response.status_code, response.body)
        if EVENT_STREAM_CONTENT_TYPE in response.content_type:
            raise StreamOptionMismatch(
                "Received a streaming response for a non-streaming request"
            )

        try:
            result = MessagesResponseBody.model_validate_json(response.body)
        except PydanticValidationError as e:
            raise DecodeError(
                f"Response body does not match the message schema: {e.errors()[0]['msg']}",
                payload=response.body,
            ) from e

        logger.debug(
            "Message %s: stop_reason=%s usage=%s",
            result.id,
            result.stop_reason,
            result.usage.model_dump(exclude_none=True),
        )
        return result

    async def create_a_message_stream(
        self, request: MessagesRequestBody
    ) -> AsyncIterator[StreamEvent]:
        """
        Send a streaming request and yield decoded events as they arrive.

        Raises:
            StreamOptionMismatch: request.stream is not true, or the reply is not an event stream
            ApiError: Non-2xx response
            DecodeError / TruncatedStreamError: Malformed stream
            TransportError: Connection or read failure
        """
        if not request.is_stream:
            raise StreamOptionMismatch(
                "create_a_message_stream() requires stream=True; use create_a_message()"
            )

        chunks = self._transport.send_streaming(
            self.url, self.build_headers(request), request.to_json_dict()
        )
        async with aclosing(chunks):
            async with aclosing(decode_stream(chunks)) as events:
                async for event in events:
                    yield event

    async def collect_stream(self, request: MessagesRequestBody) -> MessagesResponseBody:
        """Stream a request and fold the events into a complete response."""
        accumulator = StreamAccumulator()
        async with aclosing(self.create_a_message_stream(request)) as events:
            async for event in events:
                accumulator.process_event(event)
        return accumulator.finalize()

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "MessagesClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
