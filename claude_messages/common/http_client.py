"""
HTTP Client Wrapper Module

Owns the single httpx.AsyncClient a MessagesClient sends through.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx

from claude_messages.config import get_settings

logger = logging.getLogger(__name__)

# Connecting should fail fast even when generation is allowed to run for minutes
CONNECT_TIMEOUT_SECONDS = 10.0


class HttpClient:
    """
    Lazily created, reusable httpx.AsyncClient

    One-shot POSTs go through post(); streaming POSTs go through stream_post(),
    which leaves the body unread so the caller can check the status first.
    """

    def __init__(
        self,
        timeout: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            timeout: Read/write timeout (seconds), defaults to CLAUDE_MESSAGES_HTTP_TIMEOUT
            transport: httpx transport override (httpx.MockTransport in tests)
        """
        self.timeout = timeout or get_settings().CLAUDE_MESSAGES_HTTP_TIMEOUT
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            logger.debug("Creating httpx client: timeout=%ss", self.timeout)
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=min(CONNECT_TIMEOUT_SECONDS, self.timeout)),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying client; the next request opens a new one."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def post(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        POST a JSON body and read the whole response

        Returns:
            httpx.Response: Response of any status
        """
        client = await self._get_client()
        return await client.post(url, headers=headers, json=json)

    @asynccontextmanager
    async def stream_post(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> AsyncIterator[httpx.Response]:
        """
        POST a JSON body without reading the response

        Yields:
            httpx.Response: Open response; iterate aiter_bytes() or aread() it.
                The connection is released when the context exits.
        """
        client = await self._get_client()
        async with client.stream("POST", url, headers=headers, json=json) as response:
            yield response
