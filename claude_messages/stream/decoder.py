"""
Streaming Response Decoder

Turns the chunked text/event-stream body of a streaming Messages response into
typed StreamEvent values.

Wire format, one event per block, blocks separated by a blank line:

    event: content_block_delta
    data: {"type": "content_block_delta", "index": 0, "delta": {...}}

Chunk boundaries are arbitrary: an event may span several chunks and a chunk may
hold several events. Events are yielded as soon as their terminating blank line
has arrived, and not before.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator, Optional

from pydantic import ValidationError as PydanticValidationError

from claude_messages.common.errors import DecodeError, TruncatedStreamError
from claude_messages.domain.stream_event import KNOWN_EVENT_TYPES, StreamEvent, UnknownEvent

logger = logging.getLogger(__name__)


@dataclass
class ServerSentEvent:
    """One raw event block: the event: field and the joined data: lines."""

    event: Optional[str]
    data: str


class SSEDecoder:
    """
    Incremental SSE splitter.

    - Uses an empty line (\\n\\n) as event boundary
    - Supports CRLF (\\r\\n), including a CR and LF split across chunks
    - Ignores comment lines (":") and fields other than event/data
    """

    def __init__(self) -> None:
        self._buf = bytearray()
        # Buffer offset before which no event boundary can start
        self._scan_from = 0
        # Trailing CR of the last chunk, held back until the next byte shows whether it starts a CRLF
        self._pending_cr = False

    def feed(self, chunk: bytes) -> Iterator[ServerSentEvent]:
        """
        Append a chunk and return an iterator over the events it completed.

        The chunk is buffered immediately; complete events are taken off the
        front of the buffer one at a time as the iterator is consumed.
        """
        if chunk:
            if self._pending_cr:
                chunk = b"\r" + chunk
            self._pending_cr = chunk.endswith(b"\r")
            if self._pending_cr:
                chunk = chunk[:-1]
            self._buf += chunk.replace(b"\r\n", b"\n")
        return self._drain()

    def _drain(self) -> Iterator[ServerSentEvent]:
        while True:
            boundary = self._buf.find(b"\n\n", self._scan_from)
            if boundary < 0:
                self._scan_from = max(len(self._buf) - 1, 0)
                return
            block = bytes(self._buf[:boundary])
            del self._buf[:boundary + 2]
            self._scan_from = 0
            event = self._parse_block(block)
            if event is not None:
                yield event

    def close(self) -> None:
        """
        Signal end of input.

        Raises:
            TruncatedStreamError: Bytes of an incomplete event are still buffered
        """
        remaining = bytes(self._buf) + (b"\r" if self._pending_cr else b"")
        self._buf, self._scan_from, self._pending_cr = bytearray(), 0, False
        if remaining.strip():
            raise TruncatedStreamError(remaining)

    @property
    def buffered(self) -> int:
        return len(self._buf) + int(self._pending_cr)

    @staticmethod
    def _parse_block(block: bytes) -> Optional[ServerSentEvent]:
        try:
            text = block.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(
                "Stream event is not valid UTF-8",
                payload=block.decode("utf-8", errors="replace"),
            ) from e

        event_type: Optional[str] = None
        data_lines: list[str] = []
        for line in text.split("\n"):
            if not line or line.startswith(":"):
                continue
            name, _, value = line.partition(":")
            if value.startswith(" "):
                value = value[1:]
            if name == "event":
                event_type = value.strip()
            elif name == "data":
                data_lines.append(value)

        if event_type is None and not data_lines:
            return None
        return ServerSentEvent(event=event_type, data="\n".join(data_lines))


def _unknown_event(event_type: str, data: str) -> UnknownEvent:
    logger.debug("Passing through unknown stream event type: %s", event_type)
    try:
        payload = json.loads(data) if data.strip() else {}
    except json.JSONDecodeError:
        payload = data
    return UnknownEvent(event_type=event_type, data=payload)


def decode_event(sse: ServerSentEvent) -> StreamEvent:
    """
    Decode one raw event into its StreamEvent variant.

    The event: field selects the variant; when it is absent the payload "type" is
    used. Unrecognized types come back as UnknownEvent, with the data parsed as
    JSON when it is JSON and as the raw string otherwise.

    Raises:
        DecodeError: Invalid JSON, conflicting type tags, or a payload that does
            not match the schema of its type
    """
    if sse.event and sse.event not in KNOWN_EVENT_TYPES:
        return _unknown_event(sse.event, sse.data)

    try:
        payload = json.loads(sse.data) if sse.data.strip() else {}
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"Invalid JSON in stream event: {e.msg}",
            event_type=sse.event,
            payload=sse.data,
        ) from e

    if not isinstance(payload, dict):
        raise DecodeError(
            "Stream event payload is not a JSON object",
            event_type=sse.event,
            payload=sse.data,
        )

    payload_type = payload.get("type")
    if sse.event and payload_type and sse.event != payload_type:
        raise DecodeError(
            f"Event field '{sse.event}' does not match payload type '{payload_type}'",
            event_type=sse.event,
            payload=sse.data,
        )

    event_type = sse.event or payload_type
    if not event_type:
        raise DecodeError("Stream event has no type", payload=sse.data)

    model = KNOWN_EVENT_TYPES.get(event_type)
    if model is None:
        logger.debug("Passing through unknown stream event type: %s", event_type)
        return UnknownEvent(event_type=event_type, data=payload)

    try:
        return model.model_validate({**payload, "type": event_type})
    except PydanticValidationError as e:
        raise DecodeError(
            f"Stream event '{event_type}' does not match its schema: {e.errors()[0]['msg']}",
            event_type=event_type,
            payload=sse.data,
        ) from e


async def decode_stream(chunks: AsyncIterable[bytes]) -> AsyncIterator[StreamEvent]:
    """
    Decode an async byte stream into StreamEvent values.

    Yields:
        StreamEvent: Each event as soon as it is complete

    Raises:
        DecodeError: An event could not be decoded
        TruncatedStreamError: The stream ended mid-event
    """
    decoder = SSEDecoder()
    async for chunk in chunks:
        for sse in decoder.feed(chunk):
            yield decode_event(sse)
    decoder.close()


def iter_events(chunks: Iterable[bytes]) -> Iterator[StreamEvent]:
    """Synchronous counterpart of decode_stream()."""
    decoder = SSEDecoder()
    for chunk in chunks:
        for sse in decoder.feed(chunk):
            yield decode_event(sse)
    decoder.close()
