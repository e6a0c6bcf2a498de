"""
Query engine.

Runs a free-text query through the rule pipeline and filters the card store
with the resulting predicates.
"""

import logging
from collections.abc import Sequence

from wxdeck.models.card import CardRecord
from wxdeck.search.rules import DEFAULT_RULES, CardPredicate, Rule, SearchContext
from wxdeck.search.tokenizer import tokenize
from wxdeck.services.card_database import CardDatabase
from wxdeck.services.localization import Localizer

logger = logging.getLogger(__name__)


class QueryEngine:
    """
    Card search over a read-only card store.

    Each search owns its token list; concurrent searches share nothing but
    the store.

    Usage:
        engine = QueryEngine(card_db)
        engine.search("red signi power:10000+")
    """

    def __init__(
        self,
        cards: CardDatabase,
        localizer: Localizer | None = None,
        rules: Sequence[Rule] = DEFAULT_RULES,
    ) -> None:
        self._cards = cards
        self._context = SearchContext(cards=cards, localizer=localizer)
        self._rules = tuple(rules)

    def predicates(self, query: str) -> list[CardPredicate]:
        """
        Parse a query into one predicate per rule, in pipeline order.

        Every token is claimed by at most one rule.
        """
        tokens = tokenize(query)
        token_count = len(tokens)
        predicates = [rule.parse(tokens, self._context) for rule in self._rules]
        logger.debug("Parsed %d tokens into %d predicates", token_count, len(predicates))
        return predicates

    def parse(self, query: str) -> CardPredicate:
        """Parse a query into a single predicate (conjunction of all rules)."""
        predicates = self.predicates(query)
        return lambda card: all(predicate(card) for predicate in predicates)

    def search(self, query: str) -> list[CardRecord]:
        """
        Return every card matching the query, in store order.

        An empty query returns the whole store. A query matching nothing
        returns an empty list.
        """
        results = self._cards.all_records()
        for predicate in self.predicates(query):
            results = [card for card in results if predicate(card)]
        return results
