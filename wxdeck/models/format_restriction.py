"""
Format restriction banlist data.

The format restriction layer limits or bans specific canonical cards and
combinations of cards, independently of the deck construction rules.

INVARIANT: The banlist is data, not logic. Ids and quotas are opaque values
supplied from a JSON file; the validator algorithm never changes when the
banlist does.

File shape:
    {
        "bannedCombos": [{"card": 33, "partners": [34, 84]}],
        "quotas": {"37": 2, "474": 0}
    }
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from wxdeck.config import settings

logger = logging.getLogger(__name__)


class BannedCombo(BaseModel):
    """A card that may not be played together with any of its partners."""

    model_config = ConfigDict(frozen=True)

    card: int
    partners: list[int] = Field(default_factory=list)

    def is_violated_by(self, cids: set[int]) -> bool:
        """True if the card and at least one partner are both present."""
        return self.card in cids and any(partner in cids for partner in self.partners)


class FormatRestriction(BaseModel):
    """
    Banned combinations and per-card quotas.

    Attributes:
        banned_combos: Pairwise bans, checked on canonical ids
        quotas: Canonical id -> copies allowed (0 means banned outright)
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    banned_combos: list[BannedCombo] = Field(default_factory=list, alias="bannedCombos")
    quotas: dict[int, int] = Field(default_factory=dict)


def load_format_restriction(path: Path | None = None) -> FormatRestriction:
    """
    Load banlist data from a JSON file.

    Args:
        path: Path to JSON file. Defaults to the configured path.

    Returns:
        Parsed FormatRestriction.

    Raises:
        FileNotFoundError: If the file doesn't exist
        pydantic.ValidationError: If the file has the wrong shape
    """
    if path is None:
        path = settings.format_restriction_path

    if not path.exists():
        raise FileNotFoundError(f"Format restriction data not found at {path}.")

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    restriction = FormatRestriction.model_validate(data)
    logger.info(
        "Loaded format restriction from %s (%d combos, %d quotas)",
        path,
        len(restriction.banned_combos),
        len(restriction.quotas),
    )
    return restriction


@lru_cache(maxsize=1)
def get_format_restriction() -> FormatRestriction:
    """
    Get the process-wide banlist.

    Loaded once from the configured path and cached.
    """
    return load_format_restriction()
