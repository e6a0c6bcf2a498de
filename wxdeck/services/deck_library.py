"""
Named deck storage.

Decks are kept in a string key-value store supplied by the caller (a dict,
a shelf, a browser-style local storage). The library owns two kinds of key:

    deck_filenames     JSON list of deck names, kept sorted
    deck_file_<name>   the deck as {"mainDeck": [...], "lrigDeck": [...]}
"""

import json
import logging
from collections.abc import MutableMapping

from wxdeck.models.deck import Deck

logger = logging.getLogger(__name__)

INDEX_KEY = "deck_filenames"
DECK_KEY_PREFIX = "deck_file_"


class DeckLibrary:
    """
    Create, rename, delete, load and save named decks.

    Every mutating operation returns False instead of raising when the
    name is unknown or already taken.
    """

    def __init__(self, store: MutableMapping[str, str]) -> None:
        self._store = store
        self._names: list[str] = self._read_index()

    def _read_index(self) -> list[str]:
        raw = self._store.get(INDEX_KEY)
        if not raw:
            return []
        try:
            names = json.loads(raw)
        except json.JSONDecodeError:
            names = None
        if not isinstance(names, list):
            logger.warning("Deck index is corrupted; starting with an empty library")
            return []
        return [str(name) for name in names]

    def _write_index(self) -> None:
        self._names.sort()
        self._store[INDEX_KEY] = json.dumps(self._names, ensure_ascii=False)

    def names(self) -> list[str]:
        """Deck names in sorted order."""
        self._names = self._read_index()
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def create(self, name: str, deck: Deck) -> bool:
        """Add a new deck. False if the name is taken."""
        if name in self._names:
            return False
        self._names.append(name)
        self._write_index()
        self.save(name, deck)
        logger.info("Created deck %s", name)
        return True

    def rename(self, name: str, new_name: str) -> bool:
        """Move a deck to a new name. False if the source is unknown or the target taken."""
        if name not in self._names or new_name in self._names:
            return False
        deck = self.load(name)
        if deck is None:
            return False
        self.delete(name)
        self.create(new_name, deck)
        return True

    def delete(self, name: str) -> bool:
        """Remove a deck. False if unknown."""
        if name not in self._names:
            return False
        self._names.remove(name)
        self._write_index()
        self._store.pop(DECK_KEY_PREFIX + name, None)
        logger.info("Deleted deck %s", name)
        return True

    def load(self, name: str) -> Deck | None:
        """The stored deck, or None if missing or unreadable."""
        raw = self._store.get(DECK_KEY_PREFIX + name)
        if not raw:
            return None
        try:
            data = json.loads(raw)
            return Deck(
                main_deck=[int(pid) for pid in data["mainDeck"]],
                lrig_deck=[int(pid) for pid in data["lrigDeck"]],
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("Stored deck %s is unreadable", name)
            return None

    def save(self, name: str, deck: Deck) -> bool:
        """Overwrite an existing deck. False if the name is unknown."""
        if name not in self._names:
            return False
        self._store[DECK_KEY_PREFIX + name] = json.dumps(
            {"mainDeck": deck.main_deck, "lrigDeck": deck.lrig_deck}
        )
        return True
