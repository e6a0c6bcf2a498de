"""
Fetch the card database file.

Downloads card data from the configured URL (or --url) to the configured card
database path (or --output), then loads it once to report how many cards are
readable.

Exit status: 0 on success, 1 if the download or the downloaded file fails.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from wxdeck.services.card_database import download_card_database, load_card_database

logger = logging.getLogger(__name__)


async def run_download(url: str | None = None, output: Path | None = None) -> int:
    """
    Download and verify the card database.

    Returns:
        Number of readable cards in the downloaded file.

    Raises:
        ValueError: If no URL is configured or the file is not valid JSON
        httpx.HTTPError: If the download fails
    """
    path = await download_card_database(url, output)
    cards = load_card_database(path)
    logger.info("Card database at %s has %d cards", path, len(cards))
    return len(cards)


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(description="Download the card database")
    parser.add_argument("--url", help="Card data URL (defaults to WXDECK_CARD_DATABASE_URL)")
    parser.add_argument(
        "--output",
        type=Path,
        help="Where to write the file (defaults to configured card database path)",
    )

    args = parser.parse_args()
    try:
        asyncio.run(run_download(args.url, args.output))
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Card database download failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
