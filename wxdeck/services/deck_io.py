"""
Deck import, export and listing.

The persisted form is a small JSON envelope:

    {"format": "WEBXOSS Deck", "version": "1",
     "content": {"mainDeck": [pid, ...], "lrigDeck": [pid, ...]}}

Import is a trust boundary. A payload that is not exactly this shape, or
whose decks exceed the editing soft caps, is rejected as a whole: the caller
gets None, never an exception.
"""

import logging
from collections.abc import Sequence
from functools import cmp_to_key
from itertools import groupby

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator

from wxdeck.config import LRIG_DECK_SOFT_MAX, MAIN_DECK_SOFT_MAX
from wxdeck.models.card import CardRecord, CardType
from wxdeck.models.deck import Deck
from wxdeck.services.card_database import CardDatabase
from wxdeck.services.localization import Localizer

logger = logging.getLogger(__name__)

DECK_FILE_FORMAT = "WEBXOSS Deck"
DECK_FILE_VERSION = "1"

SECTION_SEPARATOR = "——————————"


class DeckContent(BaseModel):
    """Both pid lists of a persisted deck."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    main_deck: list[StrictInt] = Field(alias="mainDeck", max_length=MAIN_DECK_SOFT_MAX)
    lrig_deck: list[StrictInt] = Field(alias="lrigDeck", max_length=LRIG_DECK_SOFT_MAX)


class DeckFile(BaseModel):
    """The persisted deck envelope."""

    format: str
    version: str | int
    content: DeckContent

    @field_validator("format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        if value != DECK_FILE_FORMAT:
            raise ValueError(f"unsupported deck format {value!r}")
        return value

    @field_validator("version")
    @classmethod
    def _known_version(cls, value: str | int) -> str | int:
        # "1", 1 and "1.0" are all version 1
        try:
            numeric = float(value)
        except (ValueError, OverflowError):
            numeric = None
        if numeric != 1:
            raise ValueError(f"unsupported deck version {value!r}")
        return value


def export_deck(deck: Deck) -> str:
    """Serialize a deck to its persisted JSON form."""
    # Built without validation: export never enforces the import caps
    envelope = DeckFile.model_construct(
        format=DECK_FILE_FORMAT,
        version=DECK_FILE_VERSION,
        content=DeckContent.model_construct(
            main_deck=list(deck.main_deck), lrig_deck=list(deck.lrig_deck)
        ),
    )
    return envelope.model_dump_json(by_alias=True)


def import_deck(payload: str | bytes) -> Deck | None:
    """
    Parse a persisted deck.

    Returns:
        The deck with ids in their original order, or None if the payload is
        malformed or either list exceeds its soft cap (50 main, 20 LRIG).
    """
    try:
        envelope = DeckFile.model_validate_json(payload)
    except ValidationError as e:
        logger.warning("Rejected deck import: %d validation errors", e.error_count())
        return None

    return Deck(
        main_deck=list(envelope.content.main_deck),
        lrig_deck=list(envelope.content.lrig_deck),
    )


def deck_to_text(deck: Deck, cards: CardDatabase, localizer: Localizer | None = None) -> str:
    """
    Render a deck as a plain-text list.

    Three sections (LRIG deck, main deck without burst, main deck with
    burst), each listing "<count> <name>" for runs of the same name.
    Unknown pids are left out.
    """
    lrig = _records(deck.lrig_deck, cards)
    main = _records(deck.main_deck, cards)
    sections = [
        lrig,
        [record for record in main if not record.has_burst],
        [record for record in main if record.has_burst],
    ]

    def name_of(record: CardRecord) -> str:
        return localizer.display_name(record) if localizer else record.name

    lines: list[str] = []
    for index, section in enumerate(sections):
        for name, run in groupby(section, key=name_of):
            lines.append(f"{sum(1 for _ in run)} {name}")
        if index != len(sections) - 1:
            lines.append(SECTION_SEPARATOR)

    return "".join(f"{line}\n" for line in lines)


def _records(pids: Sequence[int], cards: CardDatabase) -> list[CardRecord]:
    records = (cards.get_by_pid(pid) for pid in pids)
    return [record for record in records if record is not None]


# =============================================================================
# DEFAULT ORDER
# =============================================================================


def _compare(a: tuple[int, CardRecord], b: tuple[int, CardRecord]) -> int:
    a_index, a_card = a
    b_index, b_card = b

    if a_card.card_type == CardType.LRIG:
        if b_card.card_type != CardType.LRIG:
            return -1
        if a_card.level != b_card.level:
            return a_card.level - b_card.level
    if a_card.card_type == CardType.ARTS:
        if b_card.card_type != CardType.ARTS:
            return 1
    if a_card.card_type == CardType.RESONA:
        if b_card.card_type == CardType.LRIG:
            return 1
        if b_card.card_type == CardType.ARTS:
            return -1
        if a_card.level != b_card.level:
            return a_card.level - b_card.level
    if a_card.card_type == CardType.SIGNI:
        if b_card.card_type != CardType.SIGNI:
            return -1
        if a_card.level != b_card.level:
            return b_card.level - a_card.level
        if a_card.power != b_card.power:
            return a_card.power - b_card.power
    if a_card.card_type == CardType.SPELL:
        if b_card.card_type != CardType.SPELL:
            return 1
    if a_card.cid != b_card.cid:
        return a_card.cid - b_card.cid
    return a_index - b_index


def sort_deck(records: Sequence[CardRecord]) -> list[CardRecord]:
    """
    Editor order for a deck half.

    LRIG deck: LRIG by level, then RESONA by level, then ARTS.
    Main deck: SIGNI by level (high first) then power (low first), then SPELL.
    Ties break on cid, then on current position.
    """
    ordered = sorted(enumerate(records), key=cmp_to_key(_compare))
    return [record for _, record in ordered]
