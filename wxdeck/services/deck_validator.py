"""
Deck legality validation.

Pure checks over printing-id lists and the card store. Nothing here raises
or mutates: every check answers with a boolean or a count.

INVARIANTS:
1. Legality checks (main deck, LRIG deck, format restriction) FAIL on any
   pid that does not resolve to a canonical record
2. Counting helpers (burst count, duplicate check) SKIP unresolved pids
3. check_deck evaluates the format restriction only on decks that
   already pass the construction checks
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from wxdeck.config import BURST_COUNT, LRIG_DECK_MAX, MAIN_DECK_SIZE, MAX_COPIES
from wxdeck.models.card import CardRecord, CardType
from wxdeck.models.deck import Deck
from wxdeck.models.format_restriction import FormatRestriction
from wxdeck.services.card_database import CardDatabase

_MAIN_DECK_FORBIDDEN = frozenset({CardType.LRIG, CardType.ARTS, CardType.RESONA})
_LRIG_DECK_FORBIDDEN = frozenset({CardType.SIGNI, CardType.SPELL})


@dataclass(frozen=True, slots=True)
class DeckCheckResult:
    """
    Outcome of every sub-check for one deck.

    format_restriction is None when the check was not requested.
    """

    main_deck: bool
    lrig_deck: bool
    format_restriction: bool | None
    burst_count: int

    @property
    def is_legal(self) -> bool:
        """True if every evaluated sub-check passed."""
        return self.main_deck and self.lrig_deck and self.format_restriction is not False


class DeckValidator:
    """
    Validates decks against construction rules and the format restriction.

    Args:
        cards: Card store used to resolve pids
        restriction: Banlist data; without one the format check always passes
    """

    def __init__(self, cards: CardDatabase, restriction: FormatRestriction | None = None) -> None:
        self._cards = cards
        self._restriction = restriction if restriction is not None else FormatRestriction()

    def _resolve_all(self, pids: Sequence[int]) -> list[CardRecord] | None:
        """Canonical records for every pid, or None if any pid is unresolved."""
        records: list[CardRecord] = []
        for pid in pids:
            record = self._cards.resolve(pid)
            if record is None:
                return None
            records.append(record)
        return records

    def check_main_deck(self, pids: Sequence[int]) -> bool:
        """
        Exactly 40 cards, no LRIG/ARTS/RESONA, exactly 20 bursts, at most 4 copies.
        """
        if len(pids) != MAIN_DECK_SIZE:
            return False
        records = self._resolve_all(pids)
        if records is None:
            return False
        if any(record.card_type in _MAIN_DECK_FORBIDDEN for record in records):
            return False
        if self.burst_count(pids) != BURST_COUNT:
            return False
        return self.check_duplicate(pids)

    def check_lrig_deck(self, pids: Sequence[int]) -> bool:
        """
        At most 10 cards, no SIGNI/SPELL, a level 0 LRIG, at most 4 copies.
        """
        if len(pids) > LRIG_DECK_MAX:
            return False
        records = self._resolve_all(pids)
        if records is None:
            return False
        if any(record.card_type in _LRIG_DECK_FORBIDDEN for record in records):
            return False
        if not any(
            record.card_type == CardType.LRIG and record.level == 0 for record in records
        ):
            return False
        return self.check_duplicate(pids)

    def check_duplicate(self, pids: Sequence[int]) -> bool:
        """
        No canonical card more than 4 times.

        Back faces count under their front face (side_a). Unresolved pids
        are skipped.
        """
        copies: Counter[int] = Counter()
        for pid in pids:
            record = self._cards.get_by_pid(pid)
            if record is None:
                continue
            if record.side_a:
                record = self._cards.get_by_pid(record.side_a)
                if record is None:
                    continue
            copies[record.cid] += 1
        return all(count <= MAX_COPIES for count in copies.values())

    def check_format_restriction(self, pids: Sequence[int]) -> bool:
        """
        No banned combination and no canonical card over its quota.
        """
        records = self._resolve_all(pids)
        if records is None:
            return False

        cids = {record.cid for record in records}
        if any(combo.is_violated_by(cids) for combo in self._restriction.banned_combos):
            return False

        remaining = dict(self._restriction.quotas)
        for record in records:
            if record.cid not in remaining:
                continue
            remaining[record.cid] -= 1
            if remaining[record.cid] < 0:
                return False
        return True

    def check_deck(self, deck: Deck, apply_format_restriction: bool = True) -> bool:
        """
        Both deck halves legal and, optionally, the whole deck within the restriction.
        """
        if not (self.check_main_deck(deck.main_deck) and self.check_lrig_deck(deck.lrig_deck)):
            return False
        if not apply_format_restriction:
            return True
        return self.check_format_restriction(deck.all_pids())

    def burst_count(self, pids: Sequence[int]) -> int:
        """Cards whose canonical record has a life burst. Unresolved pids are skipped."""
        count = 0
        for pid in pids:
            record = self._cards.resolve(pid)
            if record is not None and record.has_burst:
                count += 1
        return count

    def validate(self, deck: Deck, apply_format_restriction: bool = True) -> DeckCheckResult:
        """
        Evaluate every sub-check for display.

        Unlike check_deck, every requested sub-check is evaluated, so a
        deck can report a restriction result while still incomplete.
        is_legal agrees with check_deck.
        """
        main_ok = self.check_main_deck(deck.main_deck)
        lrig_ok = self.check_lrig_deck(deck.lrig_deck)

        restriction_ok: bool | None = None
        if apply_format_restriction:
            restriction_ok = self.check_format_restriction(deck.all_pids())

        return DeckCheckResult(
            main_deck=main_ok,
            lrig_deck=lrig_ok,
            format_restriction=restriction_ok,
            burst_count=self.burst_count(deck.main_deck),
        )
