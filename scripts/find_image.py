#!/usr/bin/env python3
"""
Look up the enrichment image for a single item.

Builds the image registry from the environment (.env is loaded), runs one
lookup and prints the resulting URL. Logs go to logs/ (see
enrichment.config.configure_logging).

Usage:
    python scripts/find_image.py cinema "Pulp Fiction" --year 1994
    python scripts/find_image.py restaurant "Le Jules Verne" --location Paris
    python scripts/find_image.py unknown-type "Mountain lake"
"""

import argparse
import asyncio
import logging
import sys
import uuid
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from enrichment.config import configure_logging
from enrichment.images import build_image_registry, is_placeholder_url
from enrichment.logging import end_run, start_run

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find a representative image for an item")
    parser.add_argument("content_type", help="Content type tag, e.g. cinema, game, music, book, place")
    parser.add_argument("title", help="Item title")
    parser.add_argument("--year", help="Release year used as a filter where supported")
    parser.add_argument("--location", help="Location appended for place, travel and restaurant")
    parser.add_argument("--quiet", action="store_true", help="Do not echo logs to the console")
    return parser.parse_args(argv)


async def find_image(args: argparse.Namespace) -> str:
    async with build_image_registry() as registry:
        return await registry.get_image(
            args.content_type,
            args.title,
            year=args.year,
            location=args.location,
        )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(console=not args.quiet)

    start_run(f"find-image-{uuid.uuid4().hex[:8]}")
    try:
        url = asyncio.run(find_image(args))
    finally:
        end_run()

    print(url)
    if is_placeholder_url(url):
        logger.info(f"No image found for {args.content_type} '{args.title}', using placeholder")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
