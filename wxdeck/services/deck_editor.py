"""
Deck editing session.

Ties the library, card store, validator and search engine together for one
user editing one deck at a time. Every edit re-sorts the deck half it
touched and saves the deck back to the library.
"""

import logging

from wxdeck.config import LRIG_DECK_SOFT_MAX, MAIN_DECK_SOFT_MAX
from wxdeck.models.card import CardRecord
from wxdeck.models.deck import Deck
from wxdeck.search.engine import QueryEngine
from wxdeck.services.card_database import CardDatabase
from wxdeck.services.deck_io import deck_to_text, export_deck, import_deck, sort_deck
from wxdeck.services.deck_library import DeckLibrary
from wxdeck.services.deck_validator import DeckCheckResult, DeckValidator
from wxdeck.services.localization import Localizer

logger = logging.getLogger(__name__)

# Seeded into an empty library so the editor always has a deck open
STARTER_DECK_NAME = "WHITE_HOPE"
STARTER_DECK = Deck(
    main_deck=list(range(112, 122)) * 4,
    lrig_deck=list(range(104, 112)),
)


class DeckEditor:
    """
    One editing session.

    Usage:
        editor = DeckEditor(library, card_db, validator, engine)
        editor.add_card(card_db.get_by_pid(112))
        editor.validate().is_legal
    """

    def __init__(
        self,
        library: DeckLibrary,
        cards: CardDatabase,
        validator: DeckValidator,
        engine: QueryEngine,
        localizer: Localizer | None = None,
    ) -> None:
        self._library = library
        self._cards = cards
        self._validator = validator
        self._engine = engine
        self._localizer = localizer

        self.deck_name = ""
        self.main_deck: list[CardRecord] = []
        self.lrig_deck: list[CardRecord] = []
        self.search_results: list[CardRecord] = []

        self._ensure_deck()
        self.select(self.deck_names()[0])

    # -------------------------------------------------------------------------
    # Deck list
    # -------------------------------------------------------------------------

    def deck_names(self) -> list[str]:
        return self._library.names()

    def _ensure_deck(self) -> None:
        if not self._library.names():
            self._library.create(STARTER_DECK_NAME, STARTER_DECK.copy())

    def select(self, name: str) -> bool:
        """Open a deck by name. False if the library has no such deck."""
        if name not in self._library.names():
            return False
        self.deck_name = name
        deck = self._library.load(name) or Deck()
        self.main_deck = sort_deck(self._records(deck.main_deck))
        self.lrig_deck = sort_deck(self._records(deck.lrig_deck))
        return True

    def _records(self, pids: list[int]) -> list[CardRecord]:
        records = (self._cards.get_by_pid(pid) for pid in pids)
        return [record for record in records if record is not None]

    def current_deck(self) -> Deck:
        """The open deck as pid lists, in editor order."""
        return Deck(
            main_deck=[record.pid for record in self.main_deck],
            lrig_deck=[record.pid for record in self.lrig_deck],
        )

    def create(self, name: str, deck: Deck | None = None) -> bool:
        """
        Create a deck and open it.

        An existing name is opened instead. Without a deck, copies the open one.
        """
        if not name:
            return False
        if name not in self._library.names():
            self._library.create(name, deck if deck is not None else self.current_deck())
        return self.select(name)

    def copy(self, name: str) -> bool:
        """Save the open deck under a new name and open the copy."""
        return self.create(name, self.current_deck())

    def delete(self, name: str | None = None) -> bool:
        """
        Delete a deck (the open one by default) and open its neighbour.
        """
        names = self._library.names()
        name = name or self.deck_name
        if name not in names:
            return False
        index = names.index(self.deck_name) if self.deck_name in names else 0
        self._library.delete(name)
        self._ensure_deck()
        names = self._library.names()
        return self.select(names[min(index, len(names) - 1)])

    def rename(self, new_name: str) -> bool:
        """Rename the open deck. False if the name is empty, unchanged, or taken."""
        if not new_name or new_name == self.deck_name:
            return False
        if not self._library.rename(self.deck_name, new_name):
            return False
        return self.select(new_name)

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def add_card(self, record: CardRecord) -> bool:
        """
        Add a card to the half it belongs to.

        LRIG, ARTS and RESONA go to the LRIG deck. False once the half is at
        its editing soft cap.
        """
        if record.is_lrig_deck_card:
            if len(self.lrig_deck) >= LRIG_DECK_SOFT_MAX:
                return False
            self.lrig_deck = sort_deck([*self.lrig_deck, record])
        else:
            if len(self.main_deck) >= MAIN_DECK_SOFT_MAX:
                return False
            self.main_deck = sort_deck([*self.main_deck, record])
        self._auto_save()
        return True

    def remove_card(self, is_lrig: bool, index: int) -> bool:
        """Remove the card at `index` of one half. False if out of range."""
        half = self.lrig_deck if is_lrig else self.main_deck
        if not 0 <= index < len(half):
            return False
        del half[index]
        half[:] = sort_deck(half)
        self._auto_save()
        return True

    def _auto_save(self) -> None:
        if self.deck_name:
            self._library.save(self.deck_name, self.current_deck())

    # -------------------------------------------------------------------------
    # Search and validation
    # -------------------------------------------------------------------------

    def search(self, query: str) -> list[CardRecord]:
        self.search_results = self._engine.search(query)
        return self.search_results

    @property
    def main_deck_valid(self) -> bool:
        return self._validator.check_main_deck(self.current_deck().main_deck)

    @property
    def lrig_deck_valid(self) -> bool:
        return self._validator.check_lrig_deck(self.current_deck().lrig_deck)

    @property
    def format_restriction_valid(self) -> bool:
        return self._validator.check_format_restriction(self.current_deck().all_pids())

    @property
    def burst_count(self) -> int:
        return self._validator.burst_count(self.current_deck().main_deck)

    def validate(self, apply_format_restriction: bool = True) -> DeckCheckResult:
        return self._validator.validate(self.current_deck(), apply_format_restriction)

    # -------------------------------------------------------------------------
    # Import / export
    # -------------------------------------------------------------------------

    def export(self) -> str:
        return export_deck(self.current_deck())

    def import_deck(self, name: str, payload: str) -> bool:
        """
        Import a persisted deck under a new name and open it.

        False if the payload is rejected or the name is empty or taken.
        """
        deck = import_deck(payload)
        if deck is None or not name or name in self._library.names():
            return False
        return self.create(name, deck)

    def to_text(self) -> str:
        return deck_to_text(self.current_deck(), self._cards, self._localizer)
