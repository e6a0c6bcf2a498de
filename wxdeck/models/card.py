"""
Card record model.

A CardRecord is one printing of a card as it appears in the card database.
Several printings (pids) may share one canonical card id (cid); rules text
and identity live on the canonical record, art and printing code on each
printing.

INVARIANTS:
- CardRecord is immutable (frozen) once loaded
- Sequence fields are tuples, never lists
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CardType(str, Enum):
    """Card types of the game."""

    LRIG = "LRIG"
    SIGNI = "SIGNI"
    SPELL = "SPELL"
    ARTS = "ARTS"
    RESONA = "RESONA"


# Types that belong in the LRIG deck rather than the main deck
LRIG_DECK_TYPES = frozenset({CardType.LRIG, CardType.ARTS, CardType.RESONA})

# Types without level/power/limit values
NON_NUMERIC_TYPES = frozenset({CardType.SPELL, CardType.ARTS})


@dataclass(frozen=True, slots=True)
class CardRecord:
    """
    One printing of a card.

    Attributes:
        pid: Printing id, unique per physical print
        cid: Canonical card id shared by reprints and alternate arts
        wxid: Printing code (e.g., "WX01-001")
        name: Card name in the database's base language
        rarity: Rarity code (lower-case, e.g., "lr", "sr", "c")
        card_type: One of the five card types
        color: "/"-delimited color names (e.g., "white/black")
        limiting: "/"-delimited LRIG classes this card is restricted to
        side_a: Printing id of the front face for double-faced cards
        timmings: Phase tags at which an ability may be used
    """

    pid: int
    cid: int
    card_type: CardType
    wxid: str = ""
    name: str = ""
    rarity: str = ""
    color: str = ""
    level: int = 0
    limit: int = 0
    power: int = 0
    limiting: str = ""
    illust: str = ""
    classes: tuple[str, ...] = ()
    cost_white: int = 0
    cost_black: int = 0
    cost_red: int = 0
    cost_blue: int = 0
    cost_green: int = 0
    cost_colorless: int = 0
    guard_flag: bool = False
    multi_ener: bool = False
    rise: bool = False
    trap: bool = False
    acce: bool = False
    cross_left: str | None = None
    cross_right: str | None = None
    side_a: int | None = None
    timmings: tuple[str, ...] = ()
    const_effect_texts: tuple[str, ...] = ()
    start_up_effect_texts: tuple[str, ...] = ()
    action_effect_texts: tuple[str, ...] = ()
    burst_effect_texts: tuple[str, ...] = ()

    @property
    def has_burst(self) -> bool:
        """True if the card carries a life burst ability."""
        return bool(self.burst_effect_texts)

    @property
    def is_lrig_deck_card(self) -> bool:
        """True if the card is built into the LRIG deck."""
        return self.card_type in LRIG_DECK_TYPES

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CardRecord":
        """
        Build a record from the camelCase JSON of the card database.

        Missing optional keys fall back to empty values.

        Raises:
            KeyError: If pid or cardType is missing
            ValueError: If cardType is not a known card type
        """
        pid = int(data["pid"])
        return cls(
            pid=pid,
            cid=int(data.get("cid", pid)),
            card_type=CardType(data["cardType"]),
            wxid=data.get("wxid") or "",
            name=data.get("name") or "",
            rarity=(data.get("rarity") or "").lower(),
            color=data.get("color") or "",
            level=int(data.get("level") or 0),
            limit=int(data.get("limit") or 0),
            power=int(data.get("power") or 0),
            limiting=data.get("limiting") or "",
            illust=data.get("illust") or "",
            classes=tuple(data.get("classes") or ()),
            cost_white=int(data.get("costWhite") or 0),
            cost_black=int(data.get("costBlack") or 0),
            cost_red=int(data.get("costRed") or 0),
            cost_blue=int(data.get("costBlue") or 0),
            cost_green=int(data.get("costGreen") or 0),
            cost_colorless=int(data.get("costColorless") or 0),
            guard_flag=bool(data.get("guardFlag")),
            multi_ener=bool(data.get("multiEner")),
            rise=bool(data.get("rise")),
            trap=bool(data.get("trap")),
            acce=bool(data.get("acce")),
            cross_left=data.get("crossLeft") or None,
            cross_right=data.get("crossRight") or None,
            side_a=_optional_int(data.get("sideA")),
            timmings=tuple(data.get("timmings") or ()),
            const_effect_texts=tuple(data.get("constEffectTexts") or ()),
            start_up_effect_texts=tuple(data.get("startUpEffectTexts") or ()),
            action_effect_texts=tuple(data.get("actionEffectTexts") or ()),
            burst_effect_texts=tuple(data.get("burstEffectTexts") or ()),
        )


def _optional_int(value: Any) -> int | None:
    # 0 is never a valid printing id
    if not value:
        return None
    return int(value)
