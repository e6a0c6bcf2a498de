"""
Deck endpoints.

Validation and import/export of decks given as pid lists.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from wxdeck.api.dependencies import get_deck_validator
from wxdeck.models.deck import Deck
from wxdeck.models.failure import FailureKind, KnownError
from wxdeck.services.deck_io import export_deck, import_deck
from wxdeck.services.deck_validator import DeckValidator

router = APIRouter(prefix="/decks", tags=["decks"])


class DeckBody(BaseModel):
    """A deck as two pid lists."""

    model_config = ConfigDict(populate_by_name=True)

    main_deck: list[int] = Field(default_factory=list, alias="mainDeck")
    lrig_deck: list[int] = Field(default_factory=list, alias="lrigDeck")

    def to_deck(self) -> Deck:
        return Deck(main_deck=list(self.main_deck), lrig_deck=list(self.lrig_deck))


class DeckCheckRequest(DeckBody):
    """Request model for a legality check."""

    apply_format_restriction: bool = Field(default=True, alias="applyFormatRestriction")


class DeckCheckResponse(BaseModel):
    """Response model for a legality check."""

    main_deck: bool
    lrig_deck: bool
    format_restriction: bool | None
    burst_count: int
    is_legal: bool


class ExportResponse(BaseModel):
    """Response model for an export."""

    payload: str


class ImportRequest(BaseModel):
    """Request model for an import."""

    payload: str


@router.post("/check", response_model=DeckCheckResponse)
async def check_deck(
    request: DeckCheckRequest,
    validator: Annotated[DeckValidator, Depends(get_deck_validator)],
) -> DeckCheckResponse:
    """
    Check a deck against the construction rules and the format restriction.

    Returns each sub-check so a client can show what is wrong.
    """
    result = validator.validate(
        request.to_deck(),
        apply_format_restriction=request.apply_format_restriction,
    )
    return DeckCheckResponse(
        main_deck=result.main_deck,
        lrig_deck=result.lrig_deck,
        format_restriction=result.format_restriction,
        burst_count=result.burst_count,
        is_legal=result.is_legal,
    )


@router.post("/export", response_model=ExportResponse)
async def export(deck: DeckBody) -> ExportResponse:
    """Serialize a deck to its persisted form."""
    return ExportResponse(payload=export_deck(deck.to_deck()))


@router.post("/import", response_model=DeckBody)
async def import_(request: ImportRequest) -> DeckBody:
    """
    Parse a persisted deck.

    Rejected payloads (bad shape, oversized decks) answer 422.
    """
    deck = import_deck(request.payload)
    if deck is None:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="The deck could not be imported.",
            suggestion="Check the file is an exported deck with at most 50 main and 20 LRIG cards.",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
    return DeckBody(main_deck=deck.main_deck, lrig_deck=deck.lrig_deck)
