"""
Localization adapter.

Search keywords, card names and class names exist in several languages.
A Localizer maps them onto what the user sees and types. The adapter is
optional everywhere: without one, keywords and names compare as raw strings.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Protocol

from wxdeck.config import settings
from wxdeck.models.card import CardRecord

logger = logging.getLogger(__name__)


class Localizer(Protocol):
    """Capability used by search rules to compare localized text."""

    def normalize_keyword(self, raw: str) -> str:
        """Canonicalize a keyword form (e.g., simplified to traditional script)."""
        ...

    def display_name(self, record: CardRecord) -> str:
        """Localized card name, used for name matching only."""
        ...

    def class_label(self, class_name: str) -> str:
        """Localized label of a canonical class name."""
        ...


class TableLocalizer:
    """
    Localizer backed by lookup tables.

    Attributes:
        characters: Per-character replacements applied to keyword forms
        card_names: Localized names by pid (falls back to cid, then record name)
        classes: Localized labels by canonical class name
    """

    def __init__(
        self,
        characters: dict[str, str] | None = None,
        card_names: dict[int, str] | None = None,
        classes: dict[str, str] | None = None,
    ) -> None:
        self._table = str.maketrans(characters or {})
        self._card_names = card_names or {}
        self._classes = classes or {}

    def normalize_keyword(self, raw: str) -> str:
        return raw.translate(self._table)

    def display_name(self, record: CardRecord) -> str:
        name = self._card_names.get(record.pid) or self._card_names.get(record.cid)
        return name or record.name

    def class_label(self, class_name: str) -> str:
        return self._classes.get(class_name, class_name)


def load_localizer(path: Path) -> TableLocalizer:
    """
    Load localization tables from a JSON file.

    File shape:
        {"characters": {"发": "發"}, "cardNames": {"1": "..."}, "classes": {"タマ": "Tama"}}

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON
    """
    if not path.exists():
        raise FileNotFoundError(f"Localization tables not found at {path}.")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Localization tables at {path} are corrupted: {e}") from e

    card_names = {int(pid): name for pid, name in data.get("cardNames", {}).items()}
    logger.info("Loaded localization tables from %s (%d card names)", path, len(card_names))

    return TableLocalizer(
        characters=data.get("characters", {}),
        card_names=card_names,
        classes=data.get("classes", {}),
    )


@lru_cache(maxsize=1)
def get_localizer() -> TableLocalizer | None:
    """
    Get the configured localizer, or None when none is configured.
    """
    if settings.localization_path is None:
        return None
    return load_localizer(settings.localization_path)
