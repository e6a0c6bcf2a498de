"""
Card search.

Free-text queries are split into tokens; each rule claims the tokens it
recognizes and contributes a predicate; the predicates are ANDed over the
card store.
"""

from wxdeck.search.engine import QueryEngine
from wxdeck.search.normalize import normalize_name
from wxdeck.search.ranges import NumericRange, parse_range
from wxdeck.search.rules import (
    DEFAULT_RULES,
    CardPredicate,
    Rule,
    SearchContext,
    claim_tokens,
    match_all,
)
from wxdeck.search.tokenizer import tokenize

__all__ = [
    "CardPredicate",
    "DEFAULT_RULES",
    "NumericRange",
    "QueryEngine",
    "Rule",
    "SearchContext",
    "claim_tokens",
    "match_all",
    "normalize_name",
    "parse_range",
    "tokenize",
]
