"""
Card database service.

Loads and caches the card database. The store is read-only once built;
search and validation treat a missing pid or cid as an expected outcome
(None), never as an error.
"""

import json
import logging
from collections.abc import Iterable, Iterator
from functools import lru_cache
from pathlib import Path
from typing import Any

import httpx

from wxdeck.config import settings
from wxdeck.models.card import CardRecord

logger = logging.getLogger(__name__)


async def download_card_database(url: str | None = None, output_path: Path | None = None) -> Path:
    """
    Download the card database JSON.

    Args:
        url: Source URL. Defaults to the configured card_database_url.
        output_path: Where to save the file. Defaults to the configured path.

    Returns:
        Path to downloaded file.

    Raises:
        ValueError: If no source URL is configured
        httpx.HTTPError: If download fails
    """
    url = url or settings.card_database_url
    if not url:
        raise ValueError("No card database URL configured (set WXDECK_CARD_DATABASE_URL)")

    if output_path is None:
        output_path = settings.card_database_path

    output_path.parent.mkdir(parents=True, exist_ok=True)

    async with httpx.AsyncClient(timeout=30.0) as client:
        async with client.stream("GET", url, timeout=300.0) as response:
            response.raise_for_status()
            with open(output_path, "wb") as f:
                async for chunk in response.aiter_bytes(8192):
                    f.write(chunk)

    get_card_database.cache_clear()
    return output_path


class CardDatabase:
    """
    In-memory card store indexed by printing id.

    Canonical records live in the same index: a card's cid is the pid of
    its canonical printing. Iteration follows insertion order.
    """

    def __init__(self, records: Iterable[CardRecord] = ()) -> None:
        self._by_pid: dict[int, CardRecord] = {}
        for record in records:
            # First occurrence of a pid wins
            self._by_pid.setdefault(record.pid, record)

    def __len__(self) -> int:
        return len(self._by_pid)

    def __contains__(self, pid: object) -> bool:
        return pid in self._by_pid

    def __iter__(self) -> Iterator[CardRecord]:
        return iter(self._by_pid.values())

    def get_by_pid(self, pid: int) -> CardRecord | None:
        """Look up a printing. None if unknown."""
        return self._by_pid.get(pid)

    def get_by_cid(self, cid: int) -> CardRecord | None:
        """Look up the canonical record for a card id. None if unknown."""
        return self._by_pid.get(cid)

    def all_records(self) -> list[CardRecord]:
        """All records in store order."""
        return list(self._by_pid.values())

    def canonical(self, record: CardRecord) -> CardRecord:
        """
        Resolve a printing to its canonical record.

        Falls back to the printing itself when its cid is not in the store.
        """
        return self._by_pid.get(record.cid, record)

    def resolve(self, pid: int) -> CardRecord | None:
        """
        Resolve a pid straight to its canonical record.

        Returns None if either the printing or its canonical record is missing.
        """
        record = self._by_pid.get(pid)
        if record is None:
            return None
        return self._by_pid.get(record.cid)


def build_card_database(cards: Iterable[dict[str, Any]]) -> CardDatabase:
    """
    Build a store from raw card dicts.

    Entries that cannot be read as a card are skipped and counted in the log.
    """
    records: list[CardRecord] = []
    skipped = 0
    for card in cards:
        try:
            records.append(CardRecord.from_dict(card))
        except (KeyError, TypeError, ValueError):
            skipped += 1
            continue

    if skipped:
        logger.warning("Skipped %d malformed card entries", skipped)

    return CardDatabase(records)


def load_card_database(path: Path | None = None) -> CardDatabase:
    """
    Load card database from file.

    Accepts either a JSON list of cards or a JSON object keyed by pid.

    Args:
        path: Path to JSON file. Defaults to the configured path.

    Returns:
        CardDatabase with every readable card.

    Raises:
        FileNotFoundError: If database file doesn't exist
        ValueError: If the file is not a JSON list or object
    """
    if path is None:
        path = settings.card_database_path

    if not path.exists():
        raise FileNotFoundError(f"Card database not found at {path}.")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Card database at {path} is corrupted: {e}") from e

    if not isinstance(data, (list, dict)):
        raise ValueError(f"Card database at {path} is corrupted: expected a list or object")

    cards = data.values() if isinstance(data, dict) else data
    db = build_card_database(cards)

    if not len(db):
        logger.warning("Card database at %s is empty. Searches will return no results.", path)
    else:
        logger.info("Loaded %d cards from %s", len(db), path)

    return db


@lru_cache(maxsize=1)
def get_card_database() -> CardDatabase:
    """
    Get cached card database.

    Raises:
        FileNotFoundError: If database file doesn't exist
    """
    return load_card_database()
