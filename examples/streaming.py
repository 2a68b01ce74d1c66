#!/usr/bin/env python3
"""
Streaming Example

Prints text deltas as they arrive, then the accumulated response.

    $ python examples/streaming.py -m "Write a haiku about the sea"
"""

import argparse
import asyncio

from claude_messages import MessagesClient, StreamAccumulator
from claude_messages.domain import (
    ClaudeModel,
    ContentBlockDeltaEvent,
    Message,
    MessagesRequestBody,
    TextDelta,
)
from claude_messages.logging_config import setup_logging


async def main(message: str) -> None:
    request = MessagesRequestBody(
        model=ClaudeModel.CLAUDE_35_HAIKU_20241022,
        max_tokens=1024,
        messages=[Message.user(message)],
        stream=True,
    )

    accumulator = StreamAccumulator()
    async with MessagesClient.from_env() as client:
        async for event in client.create_a_message_stream(request):
            accumulator.process_event(event)
            if isinstance(event, ContentBlockDeltaEvent) and isinstance(event.delta, TextDelta):
                print(event.delta.text, end="", flush=True)

    response = accumulator.finalize()
    print(f"\n\nstop_reason={response.stop_reason} output_tokens={response.usage.output_tokens}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Stream a message from Claude")
    parser.add_argument("-m", "--message", required=True)
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(args.message))
