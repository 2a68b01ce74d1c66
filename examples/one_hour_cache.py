#!/usr/bin/env python3
"""
Prompt Caching Example

Caches a large system block, first with the default 5 minute TTL and then with the
1 hour TTL. The client adds the extended-cache-ttl beta header for the second call.

    $ python examples/one_hour_cache.py -f path/to/book.txt
"""

import argparse
import asyncio
from pathlib import Path

from claude_messages import MessagesClient
from claude_messages.domain import (
    CacheControl,
    CacheTtl,
    ClaudeModel,
    Message,
    MessagesRequestBody,
    SystemPrompt,
)
from claude_messages.logging_config import setup_logging


def build_request(document: str, ttl: CacheTtl) -> MessagesRequestBody:
    system = SystemPrompt.from_text_blocks_with_cache_control(
        [
            ("You are an AI assistant tasked with analyzing literary works.", None),
            (document, CacheControl.ephemeral(ttl)),
        ]
    )
    return MessagesRequestBody(
        model=ClaudeModel.CLAUDE_37_SONNET_20250219,
        max_tokens=1024,
        system=system,
        messages=[Message.user("Analyze the major themes of this work.")],
    )


async def main(document: str) -> None:
    async with MessagesClient.from_env() as client:
        for ttl in (CacheTtl.FIVE_MINUTES, CacheTtl.ONE_HOUR):
            request = build_request(document, ttl)
            print(f"ttl={ttl} anthropic-beta={client.build_headers(request).get('anthropic-beta')}")

            response = await client.create_a_message(request)
            usage = response.usage
            print(
                f"  cache_creation_input_tokens={usage.cache_creation_input_tokens} "
                f"cache_read_input_tokens={usage.cache_read_input_tokens}"
            )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Prompt caching with 5m and 1h TTLs")
    parser.add_argument("-f", "--file", required=True, help="Text document to cache")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(Path(args.file).read_text(encoding="utf-8")))
