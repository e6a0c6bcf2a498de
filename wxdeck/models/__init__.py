from wxdeck.models.card import LRIG_DECK_TYPES, NON_NUMERIC_TYPES, CardRecord, CardType
from wxdeck.models.deck import Deck
from wxdeck.models.failure import FailureDetail, FailureKind, KnownError
from wxdeck.models.format_restriction import (
    BannedCombo,
    FormatRestriction,
    get_format_restriction,
    load_format_restriction,
)

__all__ = [
    "BannedCombo",
    "CardRecord",
    "CardType",
    "Deck",
    "FailureDetail",
    "FailureKind",
    "FormatRestriction",
    "KnownError",
    "LRIG_DECK_TYPES",
    "NON_NUMERIC_TYPES",
    "get_format_restriction",
    "load_format_restriction",
]
