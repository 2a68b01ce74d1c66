#!/usr/bin/env python3
"""
Vision Example

Sends a local image together with a question.

    $ python examples/vision.py -m "What animal is in this image?" -i path/to/image.png
"""

import argparse
import asyncio
import base64
from pathlib import Path

from claude_messages import MessagesClient
from claude_messages.domain import (
    ClaudeModel,
    ImageContentBlock,
    ImageContentSource,
    ImageMediaType,
    Message,
    MessagesRequestBody,
    TextContentBlock,
)
from claude_messages.logging_config import setup_logging


async def main(message: str, image_path: Path) -> None:
    media_type = ImageMediaType.from_path(image_path)
    data = base64.b64encode(image_path.read_bytes()).decode("ascii")

    request = MessagesRequestBody(
        model=ClaudeModel.CLAUDE_3_HAIKU_20240307,
        max_tokens=1024,
        messages=[
            Message.user(
                [
                    ImageContentBlock(source=ImageContentSource.base64(media_type, data)),
                    TextContentBlock(text=message),
                ]
            )
        ],
    )

    async with MessagesClient.from_env() as client:
        response = await client.create_a_message(request)

    print(f"Result:\n{response.text}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Ask Claude about an image")
    parser.add_argument("-m", "--message", required=True)
    parser.add_argument("-i", "--image-path", required=True)
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(args.message, Path(args.image_path)))
