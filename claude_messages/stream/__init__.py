"""
Stream Module

Incremental decoding of streaming Messages responses and folding of the decoded
events back into a complete response.
"""

from .accumulator import StreamAccumulator
from .decoder import SSEDecoder, ServerSentEvent, decode_event, decode_stream, iter_events

__all__ = [
    "StreamAccumulator",
    "SSEDecoder",
    "ServerSentEvent",
    "decode_event",
    "decode_stream",
    "iter_events",
]
