"""Tests for banlist data and the format restriction check."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from wxdeck.config import settings
from wxdeck.models.deck import Deck
from wxdeck.models.format_restriction import (
    BannedCombo,
    FormatRestriction,
    load_format_restriction,
)
from wxdeck.services.card_database import CardDatabase
from wxdeck.services.deck_validator import DeckValidator


@pytest.fixture
def validator(deck_db: CardDatabase, restriction: FormatRestriction) -> DeckValidator:
    return DeckValidator(deck_db, restriction)


class TestBannedCombo:
    def test_violated_when_card_and_partner_present(self) -> None:
        combo = BannedCombo(card=1, partners=[2, 3])

        assert combo.is_violated_by({1, 3})
        assert not combo.is_violated_by({1})
        assert not combo.is_violated_by({2, 3})


class TestCheckFormatRestriction:
    def test_legal_deck_passes(self, validator: DeckValidator, legal_deck: Deck) -> None:
        assert validator.check_format_restriction(legal_deck.all_pids())

    def test_quota_respected(self, validator: DeckValidator) -> None:
        assert validator.check_format_restriction([140, 200])
        assert not validator.check_format_restriction([140, 140, 200])

    def test_zero_quota_bans_card(self, validator: DeckValidator) -> None:
        assert not validator.check_format_restriction([150])

    def test_banned_combo(self, validator: DeckValidator) -> None:
        assert validator.check_format_restriction([141])
        assert validator.check_format_restriction([142])
        assert not validator.check_format_restriction([141, 142])

    def test_unresolved_pid_fails(self, validator: DeckValidator) -> None:
        assert not validator.check_format_restriction([100, 299])

    def test_without_restriction_everything_passes(self, deck_db: CardDatabase) -> None:
        validator = DeckValidator(deck_db)
        assert validator.check_format_restriction([150, 150, 141, 142])


class TestLoadFormatRestriction:
    def test_loads_camel_case_file(self, tmp_path: Path) -> None:
        path = tmp_path / "restriction.json"
        path.write_text(
            json.dumps({"bannedCombos": [{"card": 1, "partners": [2]}], "quotas": {"7": 0}})
        )

        restriction = load_format_restriction(path)

        assert restriction.banned_combos == [BannedCombo(card=1, partners=[2])]
        assert restriction.quotas == {7: 0}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_format_restriction(tmp_path / "missing.json")

    def test_wrong_shape(self, tmp_path: Path) -> None:
        path = tmp_path / "restriction.json"
        path.write_text(json.dumps({"quotas": {"x": "y"}}))

        with pytest.raises(ValidationError):
            load_format_restriction(path)

    def test_bundled_data_loads(self) -> None:
        """The shipped banlist parses and bans the zero-quota cards."""
        restriction = load_format_restriction(settings.format_restriction_path)

        assert restriction.quotas[474] == 0
        assert any(combo.card == 33 for combo in restriction.banned_combos)
