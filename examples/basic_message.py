#!/usr/bin/env python3
"""
Basic Message Example

Sends one non-streaming request. The API key is read from ANTHROPIC_API_KEY.

    $ python examples/basic_message.py -p "You are a helpful assistant." -m "Hello, Claude"
"""

import argparse
import asyncio

from claude_messages import MessagesClient
from claude_messages.domain import ClaudeModel, Message, MessagesRequestBody, SystemPrompt
from claude_messages.logging_config import setup_logging


async def main(prompt: str, message: str) -> None:
    request = MessagesRequestBody(
        model=ClaudeModel.CLAUDE_35_HAIKU_20241022,
        max_tokens=1024,
        system=SystemPrompt(prompt),
        messages=[Message.user(message)],
    )

    async with MessagesClient.from_env() as client:
        response = await client.create_a_message(request)

    print(f"Result:\n{response.text}")
    print(f"\nstop_reason={response.stop_reason} usage={response.usage.model_dump(exclude_none=True)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Send a message to Claude")
    parser.add_argument("-p", "--prompt", default="You are a helpful assistant.")
    parser.add_argument("-m", "--message", required=True)
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(args.prompt, args.message))
