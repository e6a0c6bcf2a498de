"""
Card search endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from wxdeck.api.dependencies import get_query_engine
from wxdeck.models.card import CardRecord
from wxdeck.search.engine import QueryEngine

router = APIRouter(prefix="/cards", tags=["cards"])


class CardResponse(BaseModel):
    """Response model for a single card printing."""

    pid: int
    cid: int
    wxid: str
    name: str
    rarity: str
    card_type: str
    color: str
    level: int
    power: int
    limit: int
    classes: list[str] = Field(default_factory=list)
    has_burst: bool = False

    @classmethod
    def from_record(cls, record: CardRecord) -> "CardResponse":
        return cls(
            pid=record.pid,
            cid=record.cid,
            wxid=record.wxid,
            name=record.name,
            rarity=record.rarity,
            card_type=record.card_type.value,
            color=record.color,
            level=record.level,
            power=record.power,
            limit=record.limit,
            classes=list(record.classes),
            has_burst=record.has_burst,
        )


class SearchResponse(BaseModel):
    """Response model for a search."""

    query: str
    count: int
    cards: list[CardResponse]


@router.get("/search", response_model=SearchResponse)
async def search_cards(
    engine: Annotated[QueryEngine, Depends(get_query_engine)],
    q: str = "",
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> SearchResponse:
    """
    Search the card database with a free-text query.

    count is the number of matches; limit only truncates the returned list.
    """
    results = engine.search(q)
    shown = results if limit is None else results[:limit]
    return SearchResponse(
        query=q,
        count=len(results),
        cards=[CardResponse.from_record(record) for record in shown],
    )
