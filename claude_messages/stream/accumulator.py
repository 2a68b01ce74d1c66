"""
Streaming Response Accumulator

Folds the StreamEvent sequence of a streaming call into the MessagesResponseBody a
non-streaming call would have returned, checking that every content block is
opened, updated and closed in order. Blocks of unknown types are kept as they
were opened; deltas of unknown types are ignored.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from claude_messages.common.errors import ApiError, DecodeError, ProtocolOrderError
from claude_messages.domain.content import TextContentBlock, ToolUseContentBlock
from claude_messages.domain.response import ErrorResponseBody, MessagesResponseBody, Usage
from claude_messages.domain.stream_event import (
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    ContentBlockStopEvent,
    ErrorEvent,
    InputJsonDelta,
    MessageDeltaEvent,
    MessageStartEvent,
    MessageStopEvent,
    PingEvent,
    StreamEvent,
    TextDelta,
    UnknownDelta,
    UnknownEvent,
)

logger = logging.getLogger(__name__)


@dataclass
class _BlockState:
    """A content block being assembled."""

    block: Any
    open: bool = True
    text_parts: list[str] = field(default_factory=list)
    partial_json: list[str] = field(default_factory=list)


class StreamAccumulator:
    """
    Accumulates streaming events and reconstructs the complete response.

    Example:
        accumulator = StreamAccumulator()
        async for event in client.create_a_message_stream(body):
            accumulator.process_event(event)
        response = accumulator.finalize()
    """

    def __init__(self) -> None:
        self._message: Optional[MessagesResponseBody] = None
        self._blocks: dict[int, _BlockState] = {}
        self._usage: Usage = Usage()
        self._stop_reason = None
        self._stop_sequence: Optional[str] = None
        self._stopped = False

    @property
    def started(self) -> bool:
        return self._message is not None

    @property
    def stopped(self) -> bool:
        return self._stopped

    def process_event(self, event: StreamEvent) -> None:
        """
        Apply one event.

        Raises:
            ProtocolOrderError: The event is out of order for the message or its block
            DecodeError: A tool_use block's accumulated input is not valid JSON
            ApiError: The stream carried an error event
        """
        if isinstance(event, (PingEvent, UnknownEvent)):
            return
        if isinstance(event, ErrorEvent):
            raise ApiError(status_code=None, error=ErrorResponseBody(error=event.error))

        if isinstance(event, MessageStartEvent):
            self._on_message_start(event)
            return

        if not self.started:
            raise ProtocolOrderError(
                f"'{event.type}' received before message_start", event_type=event.type
            )
        if self._stopped:
            raise ProtocolOrderError(
                f"'{event.type}' received after message_stop", event_type=event.type
            )

        if isinstance(event, ContentBlockStartEvent):
            self._on_block_start(event)
        elif isinstance(event, ContentBlockDeltaEvent):
            self._on_block_delta(event)
        elif isinstance(event, ContentBlockStopEvent):
            self._on_block_stop(event)
        elif isinstance(event, MessageDeltaEvent):
            self._on_message_delta(event)
        elif isinstance(event, MessageStopEvent):
            self._on_message_stop(event)

    def process_events(self, events: Iterable[StreamEvent]) -> "StreamAccumulator":
        for event in events:
            self.process_event(event)
        return self

    def _on_message_start(self, event: MessageStartEvent) -> None:
        if self.started:
            raise ProtocolOrderError("Duplicate message_start", event_type=event.type)
        self._message = event.message
        self._usage = event.message.usage.model_copy()
        self._stop_reason = event.message.stop_reason
        self._stop_sequence = event.message.stop_sequence
        for index, block in enumerate(event.message.content):
            self._blocks[index] = _BlockState(block=block, open=False)

    def _open_block(self, event_type: str, index: int) -> _BlockState:
        state = self._blocks.get(index)
        if state is None:
            raise ProtocolOrderError(
                f"'{event_type}' references content block {index} which was never opened",
                event_type=event_type,
                index=index,
            )
        if not state.open:
            raise ProtocolOrderError(
                f"'{event_type}' references content block {index} which is already closed",
                event_type=event_type,
                index=index,
            )
        return state

    def _on_block_start(self, event: ContentBlockStartEvent) -> None:
        if event.index in self._blocks:
            raise ProtocolOrderError(
                f"Content block {event.index} opened twice",
                event_type=event.type,
                index=event.index,
            )
        state = _BlockState(block=event.content_block)
        if isinstance(event.content_block, TextContentBlock):
            state.text_parts.append(event.content_block.text)
        self._blocks[event.index] = state

    def _on_block_delta(self, event: ContentBlockDeltaEvent) -> None:
        state = self._open_block(event.type, event.index)
        delta = event.delta
        if isinstance(delta, UnknownDelta):
            logger.debug("Ignoring unknown delta type '%s' for content block %d", delta.type, event.index)
        elif isinstance(delta, TextDelta) and isinstance(state.block, TextContentBlock):
            state.text_parts.append(delta.text)
        elif isinstance(delta, InputJsonDelta) and isinstance(state.block, ToolUseContentBlock):
            state.partial_json.append(delta.partial_json)
        else:
            raise ProtocolOrderError(
                f"'{delta.type}' does not apply to a '{state.block.type}' block",
                event_type=event.type,
                index=event.index,
            )

    def _on_block_stop(self, event: ContentBlockStopEvent) -> None:
        state = self._open_block(event.type, event.index)
        state.open = False
        if isinstance(state.block, TextContentBlock):
            state.block = state.block.model_copy(update={"text": "".join(state.text_parts)})
        elif isinstance(state.block, ToolUseContentBlock) and state.partial_json:
            raw = "".join(state.partial_json)
            try:
                tool_input = json.loads(raw) if raw.strip() else {}
            except json.JSONDecodeError as e:
                raise DecodeError(
                    f"Invalid tool input JSON for content block {event.index}: {e.msg}",
                    event_type=event.type,
                    payload=raw,
                ) from e
            state.block = state.block.model_copy(update={"input": tool_input})

    def _on_message_delta(self, event: MessageDeltaEvent) -> None:
        if event.delta.stop_reason is not None:
            self._stop_reason = event.delta.stop_reason
        if event.delta.stop_sequence is not None:
            self._stop_sequence = event.delta.stop_sequence
        if event.usage is not None:
            updates = event.usage.model_dump(exclude_none=True)
            self._usage = self._usage.model_copy(update=updates)

    def _on_message_stop(self, event: MessageStopEvent) -> None:
        still_open = sorted(index for index, state in self._blocks.items() if state.open)
        if still_open:
            raise ProtocolOrderError(
                f"message_stop received while content blocks {still_open} are open",
                event_type=event.type,
                index=still_open[0],
            )
        self._stopped = True

    @property
    def text(self) -> str:
        """Text received so far, including blocks that are still open."""
        parts = []
        for index in sorted(self._blocks):
            state = self._blocks[index]
            if isinstance(state.block, TextContentBlock):
                parts.append("".join(state.text_parts) if state.open else state.block.text)
        return "".join(parts)

    def finalize(self) -> MessagesResponseBody:
        """
        Build the complete response.

        Raises:
            ProtocolOrderError: message_start or message_stop was never received
        """
        if self._message is None:
            raise ProtocolOrderError("Stream ended without message_start")
        if not self._stopped:
            raise ProtocolOrderError("Stream ended without message_stop")

        content = [self._blocks[index].block for index in sorted(self._blocks)]
        logger.debug(
            "Accumulated message %s: blocks=%d stop_reason=%s",
            self._message.id,
            len(content),
            self._stop_reason,
        )
        return self._message.model_copy(
            update={
                "content": content,
                "stop_reason": self._stop_reason,
                "stop_sequence": self._stop_sequence,
                "usage": self._usage,
            }
        )
