"""
Search rules.

A rule claims the query tokens it recognizes and turns them into a
predicate over card records.

CONTRACT (every rule):
- Tokens are examined left to right, one whole token at a time
- A recognized token is removed from the shared token list
- Unrecognized tokens stay in place, in order
- A rule that recognized nothing returns a predicate that accepts every card
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from operator import attrgetter
from typing import Protocol, TypeVar

from wxdeck.models.card import NON_NUMERIC_TYPES, CardRecord, CardType
from wxdeck.search import keywords
from wxdeck.search.normalize import normalize_name
from wxdeck.search.ranges import NumericRange, parse_range
from wxdeck.services.card_database import CardDatabase
from wxdeck.services.localization import Localizer

CardPredicate = Callable[[CardRecord], bool]

T = TypeVar("T")


def match_all(_card: CardRecord) -> bool:
    """Identity predicate for rules that matched no tokens."""
    return True


@dataclass(frozen=True)
class SearchContext:
    """
    Collaborators a rule needs while parsing and matching.

    Attributes:
        cards: Card store, used to resolve canonical records
        localizer: Optional localization adapter
    """

    cards: CardDatabase
    localizer: Localizer | None = None

    def normalize_keyword(self, raw: str) -> str:
        if self.localizer is None:
            return raw
        return self.localizer.normalize_keyword(raw)

    def class_label(self, class_name: str) -> str:
        if self.localizer is None:
            return class_name.lower()
        return self.localizer.class_label(class_name).lower()

    def display_name(self, record: CardRecord) -> str:
        if self.localizer is None:
            return record.name
        return self.localizer.display_name(record)

    def canonical(self, record: CardRecord) -> CardRecord:
        return self.cards.canonical(record)


class Rule(Protocol):
    """A token-claiming matcher."""

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        """Remove recognized tokens from `tokens` and return a predicate."""
        ...


def claim_tokens(tokens: list[str], recognize: Callable[[str], T | None]) -> list[T]:
    """
    Remove every token `recognize` accepts; return the parsed values in order.

    `recognize` returns None for tokens it does not accept.
    """
    claimed: list[T] = []
    remaining: list[str] = []
    for token in tokens:
        value = recognize(token)
        if value is None:
            remaining.append(token)
        else:
            claimed.append(value)
    tokens[:] = remaining
    return claimed


def _keyword_lookup(
    table: dict[str, tuple[str, ...]],
    context: SearchContext,
) -> dict[str, str]:
    """Normalized synonym -> canonical value. Earlier entries win."""
    lookup: dict[str, str] = {}
    for value, synonyms in table.items():
        for synonym in synonyms:
            lookup.setdefault(context.normalize_keyword(synonym), value)
    return lookup


# =============================================================================
# KEYWORD RULES
# =============================================================================


class TextualRule:
    """
    Matches keyword synonyms against one text field of the printed card.

    Args:
        read: Field accessor returning the card's text for this rule
        table: Canonical value -> synonyms
        exact: Whole-value comparison if True, substring test otherwise
    """

    def __init__(
        self,
        read: Callable[[CardRecord], str],
        table: dict[str, tuple[str, ...]],
        exact: bool,
    ) -> None:
        self._read = read
        self._table = table
        self._exact = exact

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        lookup = _keyword_lookup(self._table, context)
        matched = claim_tokens(tokens, lookup.get)
        if not matched:
            return match_all

        read = self._read
        exact = self._exact

        def predicate(card: CardRecord) -> bool:
            value = read(card).lower()
            if exact:
                return value in matched
            return any(keyword in value for keyword in matched)

        return predicate


def _flag(read: Callable[[CardRecord], bool]) -> Callable[[CardRecord], str]:
    return lambda card: "true" if read(card) else "false"


class SkillRule:
    """Matches cards whose canonical record has any of the named effect groups."""

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        lookup = _keyword_lookup(keywords.SKILL_KEYWORDS, context)
        groups = claim_tokens(tokens, lookup.get)
        if not groups:
            return match_all

        readers = [attrgetter(group) for group in dict.fromkeys(groups)]

        def predicate(card: CardRecord) -> bool:
            canonical = context.canonical(card)
            return any(read(canonical) for read in readers)

        return predicate


class NoBurstRule:
    """Matches SIGNI and SPELL cards without a life burst."""

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        forms = {context.normalize_keyword(keyword) for keyword in keywords.NO_BURST_KEYWORDS}
        if not claim_tokens(tokens, lambda token: True if token in forms else None):
            return match_all

        def predicate(card: CardRecord) -> bool:
            canonical = context.canonical(card)
            return (
                canonical.card_type in (CardType.SIGNI, CardType.SPELL)
                and not canonical.burst_effect_texts
            )

        return predicate


class CrossRule:
    """Matches SIGNI with a cross link on either side."""

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        forms = {context.normalize_keyword(keyword) for keyword in keywords.CROSS_KEYWORDS}
        if not claim_tokens(tokens, lambda token: True if token in forms else None):
            return match_all

        def predicate(card: CardRecord) -> bool:
            canonical = context.canonical(card)
            return canonical.card_type == CardType.SIGNI and bool(
                canonical.cross_left or canonical.cross_right
            )

        return predicate


class TimmingRule:
    """Matches cards usable in any of the named phases."""

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        lookup = _keyword_lookup(keywords.TIMMING_KEYWORDS, context)
        phases = set(claim_tokens(tokens, lookup.get))
        if not phases:
            return match_all

        def predicate(card: CardRecord) -> bool:
            return not phases.isdisjoint(card.timmings)

        return predicate


class LimitingRule:
    """
    Matches cards playable by the named LRIG classes.

    A trailing "+" on a class token also admits cards with no class
    restriction at all.
    """

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        labels = [(context.class_label(name), name) for name in keywords.LRIG_CLASSES]

        def recognize(token: str) -> tuple[str, bool] | None:
            for label, name in labels:
                if token == label:
                    return name, False
                if token == label + "+":
                    return name, True
            return None

        matched = claim_tokens(tokens, recognize)
        if not matched:
            return match_all

        classes = {name for name, _ in matched}
        include_unrestricted = any(plus for _, plus in matched)

        def predicate(card: CardRecord) -> bool:
            if card.card_type == CardType.LRIG:
                return not classes.isdisjoint(card.classes)
            if not card.limiting:
                return include_unrestricted
            return not classes.isdisjoint(card.limiting.split("/"))

        return predicate


class ClassRule:
    """Matches SIGNI classes; labels compare with spaces removed."""

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        lookup = {
            context.class_label(name).replace(" ", ""): name for name in keywords.SIGNI_CLASSES
        }
        classes = set(claim_tokens(tokens, lookup.get))
        if not classes:
            return match_all

        def predicate(card: CardRecord) -> bool:
            return not classes.isdisjoint(context.canonical(card).classes)

        return predicate


# =============================================================================
# NUMERIC RULES
# =============================================================================


def _strip_keyword(token: str, prefixes: Iterable[str]) -> str | None:
    """Remainder after the first matching prefix and an optional colon."""
    for prefix in prefixes:
        if token.startswith(prefix):
            rest = token[len(prefix) :]
            return rest[1:] if rest.startswith(":") else rest
    return None


class NumericRule:
    """
    Matches a numeric field against keyword-prefixed ranges, e.g. "power:10000+".

    All ranges in one query must hold. SPELL and ARTS never match.
    """

    def __init__(self, read: Callable[[CardRecord], int], prefixes: tuple[str, ...]) -> None:
        self._read = read
        self._prefixes = prefixes

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        prefixes = [context.normalize_keyword(prefix) for prefix in self._prefixes]

        def recognize(token: str) -> NumericRange | None:
            rest = _strip_keyword(token, prefixes)
            if rest is None:
                return None
            return parse_range(rest)

        ranges = claim_tokens(tokens, recognize)
        if not ranges:
            return match_all

        read = self._read

        def predicate(card: CardRecord) -> bool:
            if card.card_type in NON_NUMERIC_TYPES:
                return False
            value = read(card)
            return all(value in numeric_range for numeric_range in ranges)

        return predicate


class NumberRule:
    """
    Matches bare ranges, reading small bounds as level and large ones as power.

    "3" and "2-4" constrain level; "10000+" constrains power.
    """

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        def recognize(token: str) -> NumericRange | None:
            return parse_range(token[1:] if token.startswith(":") else token)

        ranges = claim_tokens(tokens, recognize)
        if not ranges:
            return match_all

        def predicate(card: CardRecord) -> bool:
            if card.card_type in NON_NUMERIC_TYPES:
                return False
            return all(
                (card.level if r.is_bounded_below_ten else card.power) in r for r in ranges
            )

        return predicate


# =============================================================================
# PRINTING RULES
# =============================================================================


class IllustRule:
    """Matches illustrator names by substring, e.g. "illust:hitoyo"."""

    _PATTERN = re.compile(
        "^(?:" + "|".join(re.escape(prefix) for prefix in keywords.ILLUST_PREFIXES) + "):?(.+)$"
    )

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        def recognize(token: str) -> str | None:
            match = self._PATTERN.match(token)
            return match.group(1) if match else None

        illusts = claim_tokens(tokens, recognize)
        if not illusts:
            return match_all

        def predicate(card: CardRecord) -> bool:
            illust = card.illust.lower()
            return any(name in illust for name in illusts)

        return predicate


class WxidRule:
    """Matches printing codes by prefix; "wx01-001", "wd0310" and "pr-" all work."""

    _PATTERN = re.compile(r"^(wx\d{2}|wd\d{2}|pr|sp\d{2})-?(re\d{0,2}|cb\d{0,2}|\d{0,3}[ab]?)$")

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        def recognize(token: str) -> str | None:
            match = self._PATTERN.match(token)
            return f"{match.group(1)}-{match.group(2)}" if match else None

        prefixes = tuple(claim_tokens(tokens, recognize))
        if not prefixes:
            return match_all

        def predicate(card: CardRecord) -> bool:
            return card.wxid.lower().startswith(prefixes)

        return predicate


class NameRule:
    """
    Catch-all: every remaining token is a name fragment.

    "a|b" matches names containing a or b; separate tokens must all match.
    """

    def parse(self, tokens: list[str], context: SearchContext) -> CardPredicate:
        groups = claim_tokens(
            tokens,
            lambda token: [normalize_name(word) for word in re.split(r"\|+", token)],
        )
        if not groups:
            return match_all

        def predicate(card: CardRecord) -> bool:
            name = normalize_name(context.display_name(card))
            return all(any(word in name for word in group) for group in groups)

        return predicate


# Pipeline order: specific rules claim ambiguous tokens before the catch-alls
DEFAULT_RULES: tuple[Rule, ...] = (
    TextualRule(attrgetter("color"), keywords.COLOR_KEYWORDS, exact=False),
    TextualRule(lambda card: card.card_type.value, keywords.TYPE_KEYWORDS, exact=True),
    TextualRule(attrgetter("rarity"), keywords.RARITY_KEYWORDS, exact=True),
    TextualRule(_flag(attrgetter("rise")), keywords.RISE_KEYWORDS, exact=True),
    TextualRule(_flag(attrgetter("trap")), keywords.TRAP_KEYWORDS, exact=True),
    TextualRule(_flag(attrgetter("acce")), keywords.ACCE_KEYWORDS, exact=True),
    SkillRule(),
    NoBurstRule(),
    CrossRule(),
    TimmingRule(),
    LimitingRule(),
    ClassRule(),
    NumericRule(attrgetter("power"), keywords.POWER_KEYWORDS),
    NumericRule(attrgetter("level"), keywords.LEVEL_KEYWORDS),
    NumericRule(attrgetter("limit"), keywords.LIMIT_KEYWORDS),
    NumberRule(),
    IllustRule(),
    WxidRule(),
    NameRule(),
)
