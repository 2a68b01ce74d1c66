"""
Anthropic HTTP Transport

Sends Messages API requests over httpx.
"""

import logging
from typing import Any, AsyncIterator, Optional

import httpx

from claude_messages.common.errors import StreamOptionMismatch, TransportError
from claude_messages.common.http_client import HttpClient
from claude_messages.common.sanitizer import sanitize_headers
from claude_messages.common.timer import Timer
from claude_messages.providers.base import (
    MessagesTransport,
    ProviderResponse,
    dumps_body,
    parse_api_error,
)

logger = logging.getLogger(__name__)

EVENT_STREAM_CONTENT_TYPE = "text/event-stream"


class AnthropicTransport(MessagesTransport):
    """
    httpx-based transport for the Messages endpoint.

    One HttpClient (and therefore one httpx.AsyncClient) is reused for all calls
    until aclose().
    """

    def __init__(
        self,
        http_client: Optional[HttpClient] = None,
        timeout: Optional[int] = None,
    ):
        self._http = http_client or HttpClient(timeout=timeout)

    async def send_once(
        self,
        url: str,
        headers: dict[str, str],
        body: dict[str, Any],
    ) -> ProviderResponse:
        logger.debug(
            "Messages Request: url=%s headers=%s body=%s",
            url,
            sanitize_headers(headers),
            dumps_body(body),
        )

        timer = Timer().start()
        try:
            response = await self._http.post(url, headers=headers, json=body)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timeout: {e}", url=url) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request error: {e}", url=url) from e
        timer.stop()

        logger.debug(
            "Messages Response: status=%s %s",
            response.status_code,
            timer.summary(),
        )
        return ProviderResponse(
            status_code=response.status_code,
            headers={key.lower(): value for key, value in response.headers.items()},
            body=response.text,
            first_byte_delay_ms=timer.first_byte_delay_ms,
            total_time_ms=timer.total_time_ms,
        )

    async def send_streaming(
        self,
        url: str,
        headers: dict[str, str],
        body: dict[str, Any],
    ) -> AsyncIterator[bytes]:
        logger.debug(
            "Messages Stream Request: url=%s headers=%s body=%s",
            url,
            sanitize_headers(headers),
            dumps_body(body),
        )

        timer = Timer().start()
        try:
            async with self._http.stream_post(url, headers=headers, json=body) as response:
                if not response.is_success:
                    raw = await response.aread()
                    raise parse_api_error(
                        response.status_code, raw.decode("utf-8", errors="replace")
                    )

                content_type = response.headers.get("content-type", "")
                if EVENT_STREAM_CONTENT_TYPE not in content_type:
                    raise StreamOptionMismatch(
                        f"Expected a {EVENT_STREAM_CONTENT_TYPE} response, got '{content_type}'"
                    )

                async for chunk in response.aiter_bytes():
                    timer.mark_first_byte()
                    yield chunk
        except httpx.TimeoutException as e:
            raise TransportError(f"Stream timeout: {e}", url=url) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Stream error: {e}", url=url) from e
        finally:
            timer.stop()
            logger.debug("Messages Stream finished: %s", timer.summary())

    async def aclose(self) -> None:
        await self._http.close()
