"""
Check an exported deck file.

Validates a deck against the construction rules and, unless disabled, the
format restriction, and logs the result of each sub-check.

Exit status: 0 legal, 1 illegal, 2 unreadable deck file.
"""

import argparse
import logging
import sys
from pathlib import Path

from wxdeck.models.format_restriction import get_format_restriction
from wxdeck.services.card_database import load_card_database
from wxdeck.services.deck_io import import_deck
from wxdeck.services.deck_validator import DeckValidator

logger = logging.getLogger(__name__)

EXIT_LEGAL = 0
EXIT_ILLEGAL = 1
EXIT_UNREADABLE = 2


def run_check(
    deck_path: Path,
    cards_path: Path | None = None,
    apply_format_restriction: bool = True,
) -> int:
    """
    Validate one deck file.

    Returns:
        Process exit status.
    """
    try:
        payload = deck_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Cannot read deck file %s: %s", deck_path, e)
        return EXIT_UNREADABLE

    deck = import_deck(payload)
    if deck is None:
        logger.error("%s is not a valid deck file", deck_path)
        return EXIT_UNREADABLE

    validator = DeckValidator(load_card_database(cards_path), get_format_restriction())
    result = validator.validate(deck, apply_format_restriction=apply_format_restriction)

    logger.info("Main deck: %s", "ok" if result.main_deck else "illegal")
    logger.info("LRIG deck: %s", "ok" if result.lrig_deck else "illegal")
    logger.info("Life burst: %d", result.burst_count)
    if result.format_restriction is not None:
        logger.info("Format restriction: %s", "ok" if result.format_restriction else "violated")

    return EXIT_LEGAL if result.is_legal else EXIT_ILLEGAL


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = argparse.ArgumentParser(description="Check an exported deck for legality")
    parser.add_argument("deck", type=Path, help="Path to exported deck JSON")
    parser.add_argument(
        "--cards",
        type=Path,
        help="Path to card database JSON (defaults to configured path)",
    )
    parser.add_argument(
        "--no-format-restriction",
        action="store_true",
        help="Skip the format restriction check",
    )

    args = parser.parse_args()
    sys.exit(
        run_check(
            args.deck,
            cards_path=args.cards,
            apply_format_restriction=not args.no_format_restriction,
        )
    )


if __name__ == "__main__":
    main()
