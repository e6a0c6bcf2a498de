"""
WXDeck services.

Card store, localization, deck validation, import/export and storage.
The editing session lives in wxdeck.services.deck_editor; it depends on
wxdeck.search and is imported from there directly.
"""

from wxdeck.services.card_database import (
    CardDatabase,
    build_card_database,
    download_card_database,
    get_card_database,
    load_card_database,
)
from wxdeck.services.deck_io import (
    DECK_FILE_FORMAT,
    DeckFile,
    deck_to_text,
    export_deck,
    import_deck,
    sort_deck,
)
from wxdeck.services.deck_library import DeckLibrary
from wxdeck.services.deck_validator import DeckCheckResult, DeckValidator
from wxdeck.services.localization import (
    Localizer,
    TableLocalizer,
    get_localizer,
    load_localizer,
)

__all__ = [
    "CardDatabase",
    "build_card_database",
    "download_card_database",
    "get_card_database",
    "load_card_database",
    # Deck import/export
    "DECK_FILE_FORMAT",
    "DeckFile",
    "deck_to_text",
    "export_deck",
    "import_deck",
    "sort_deck",
    # Storage
    "DeckLibrary",
    # Validation
    "DeckCheckResult",
    "DeckValidator",
    # Localization
    "Localizer",
    "TableLocalizer",
    "get_localizer",
    "load_localizer",
]
