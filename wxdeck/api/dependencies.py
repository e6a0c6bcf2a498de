"""
Request dependencies.

The card store, localizer and banlist are process-wide and cached; these
functions wrap them for FastAPI so tests can override them.
"""

from fastapi import status

from wxdeck.models.failure import FailureKind, KnownError
from wxdeck.models.format_restriction import get_format_restriction
from wxdeck.search.engine import QueryEngine
from wxdeck.services.card_database import CardDatabase, get_card_database
from wxdeck.services.deck_validator import DeckValidator
from wxdeck.services.localization import get_localizer


def _card_database() -> CardDatabase:
    try:
        return get_card_database()
    except FileNotFoundError as e:
        raise KnownError(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message="Card database not available. Please try again later.",
            detail=str(e),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        ) from e


def get_query_engine() -> QueryEngine:
    """Search engine over the configured card database."""
    return QueryEngine(_card_database(), get_localizer())


def get_deck_validator() -> DeckValidator:
    """Validator over the configured card database and banlist."""
    return DeckValidator(_card_database(), get_format_restriction())
