from typing import Any

import pytest

from wxdeck.models.card import CardRecord
from wxdeck.models.deck import Deck
from wxdeck.models.format_restriction import BannedCombo, FormatRestriction
from wxdeck.services.card_database import CardDatabase, build_card_database

BURST = ("【ライフバースト】：カードを1枚引く。",)


def card(pid: int, card_type: str = "SIGNI", **fields: Any) -> dict[str, Any]:
    """Raw card entry in the camelCase shape of the card database."""
    return {"pid": pid, "cid": pid, "cardType": card_type, **fields}


@pytest.fixture
def sample_cards() -> list[dict[str, Any]]:
    """A small mixed card pool for search tests."""
    return [
        card(
            1, "LRIG", name="Tama, Level 0", wxid="WX01-001", rarity="LR",
            color="white", level=0, limit=0, classes=["タマ"],
        ),
        card(
            2, "LRIG", name="Tama, Level 3", wxid="WX01-002", rarity="LR",
            color="white", level=3, limit=7, classes=["タマ"],
            timmings=["mainPhase"], actionEffectTexts=["【起】..."],
        ),
        card(3, "ARTS", name="Gurgle Blast", wxid="WX01-010", rarity="LC", color="red",
             timmings=["mainPhase", "attackPhase"]),
        card(4, "RESONA", name="Alexandrite", wxid="WX09-020", rarity="LR", color="black",
             level=3, power=12000),
        card(
            10, name="Servant O", wxid="WX01-100", rarity="C", color="colorless",
            level=1, power=1000, classes=["精元"], illust="Hitoyo",
            burstEffectTexts=list(BURST),
        ),
        card(11, name="Anne", wxid="WX02-050", rarity="SR", color="red",
             level=2, power=5000, classes=["精武", "ウェポン"], illust="Mitsuki Anzu",
             constEffectTexts=["【常】..."]),
        card(12, name="Barbaros", wxid="WX05-030", rarity="R", color="red",
             level=4, power=12000, classes=["精武"], crossLeft="X"),
        card(13, "SPELL", name="Ice Block", wxid="WX03-070", rarity="C", color="blue",
             timmings=["spellCutIn"], burstEffectTexts=list(BURST)),
        # Reprint of Servant O: burst text lives on the canonical record only
        card(14, name="Servant O", wxid="PR-001", rarity="PR", color="colorless",
             level=1, power=1000, illust="Someone Else", cid=10),
        card(20, name="Tama's Friend", wxid="WD01-005", rarity="C", color="white/green",
             level=3, power=8000, limiting="タマ", classes=["精羅", "植物"]),
        card(21, name="Free Spirit", wxid="WX04-040", rarity="C", color="green",
             level=2, power=3000, classes=["植物"], rise=True),
    ]


@pytest.fixture
def sample_db(sample_cards: list[dict[str, Any]]) -> CardDatabase:
    return build_card_database(sample_cards)


@pytest.fixture
def deck_cards() -> list[dict[str, Any]]:
    """
    Card pool for deck validation tests.

    100-109 SIGNI with burst, 110-119 SIGNI without, 200-204 LRIG deck cards,
    140-142 burst SIGNI used by the format restriction fixture.
    """
    cards = [card(pid, level=pid % 4 + 1, power=1000 * (pid % 5 + 1), burstEffectTexts=list(BURST))
             for pid in range(100, 110)]
    cards += [card(pid, level=pid % 4 + 1, power=1000 * (pid % 5 + 1)) for pid in range(110, 120)]
    cards += [
        # Alternate art of 100
        card(120, level=1, power=1000, burstEffectTexts=list(BURST), cid=100),
        # Back face of 111
        card(130, level=1, power=1000, sideA=111),
        card(140, level=2, power=2000, burstEffectTexts=list(BURST)),
        card(141, level=2, power=2000, burstEffectTexts=list(BURST)),
        card(142, level=2, power=2000, burstEffectTexts=list(BURST)),
        card(150, "SPELL", burstEffectTexts=list(BURST)),
        card(200, "LRIG", level=0),
        card(201, "LRIG", level=1),
        card(202, "LRIG", level=2),
        card(203, "ARTS"),
        card(204, "RESONA", level=3),
        # Printing whose canonical record is missing from the store
        card(299, level=1, power=1000, burstEffectTexts=list(BURST), cid=9999),
    ]
    return cards


@pytest.fixture
def deck_db(deck_cards: list[dict[str, Any]]) -> CardDatabase:
    return build_card_database(deck_cards)


@pytest.fixture
def legal_deck() -> Deck:
    """40 main (20 burst), 5 LRIG deck cards with a level 0 LRIG."""
    return Deck(
        main_deck=[pid for pid in range(100, 120) for _ in range(2)],
        lrig_deck=[200, 201, 202, 203, 204],
    )


@pytest.fixture
def restriction() -> FormatRestriction:
    return FormatRestriction(
        banned_combos=[BannedCombo(card=141, partners=[142])],
        quotas={140: 1, 150: 0},
    )


@pytest.fixture
def record_of(sample_db: CardDatabase):
    """Look up a sample card by pid."""

    def lookup(pid: int) -> CardRecord:
        record = sample_db.get_by_pid(pid)
        assert record is not None
        return record

    return lookup


@pytest.fixture
def make_card():
    """Factory for raw card entries: make_card(pid, card_type="SIGNI", **fields)."""
    return card


@pytest.fixture
def burst_text() -> list[str]:
    return list(BURST)
