"""
Keyword dispatcher for ABOGA.

Selects exactly one response template for a user query by testing the
lowercased text against an ordered list of rules. The first matching rule
wins, so the order of DISPATCH_RULES decides how ambiguous queries (for
example one mentioning both "denuncia" and "sunarp") are classified.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from aboga.schemas import StructuredResponse
from aboga.services.response_templates import QueryType, get_template

logger = logging.getLogger(__name__)


def contains_all(*keywords: str) -> Callable[[str], bool]:
    """Predicate that matches when every keyword is a substring."""
    return lambda text: all(keyword in text for keyword in keywords)


def contains_any(*keywords: str) -> Callable[[str], bool]:
    """Predicate that matches when at least one keyword is a substring."""
    return lambda text: any(keyword in text for keyword in keywords)


@dataclass(frozen=True)
class DispatchRule:
    """Rule for routing a query to a template."""
    predicate: Callable[[str], bool]
    query_type: QueryType
    description: str


DISPATCH_RULES: List[DispatchRule] = [
    DispatchRule(contains_all("carta", "notarial"), QueryType.NOTARIAL_LETTER, "Notarial letter"),
    DispatchRule(contains_any("denuncia", "usurpación"), QueryType.USURPATION_COMPLAINT, "Usurpation complaint"),
    DispatchRule(contains_any("desalojo", "precari"), QueryType.EVICTION, "Eviction for precarious occupation"),
    DispatchRule(contains_all("contrato", "compraventa"), QueryType.SALE_CONTRACT, "Sale contract"),
    DispatchRule(contains_any("sunarp", "partida"), QueryType.REGISTRY_SEARCH, "Registry search"),
]


class QueryClassifier:
    """Routes queries to templates using ordered keyword rules."""

    def __init__(self, rules: Optional[List[DispatchRule]] = None):
        self.rules: List[DispatchRule] = list(rules if rules is not None else DISPATCH_RULES)

    def classify_query(self, query: str) -> QueryType:
        """Return the query type of the first matching rule, or GENERAL."""
        text = (query or "").lower()
        for rule in self.rules:
            if rule.predicate(text):
                logger.debug(f"Query matched rule: {rule.description}")
                return rule.query_type
        return QueryType.GENERAL

    def dispatch(self, query: str) -> StructuredResponse:
        """Select the response template for a query."""
        query_type = self.classify_query(query)
        logger.info(f"Dispatched query to template {query_type.value}")
        return get_template(query_type)


# Global query classifier instance
_query_classifier: Optional[QueryClassifier] = None


def get_query_classifier() -> QueryClassifier:
    """Get the global query classifier instance."""
    global _query_classifier
    if _query_classifier is None:
        _query_classifier = QueryClassifier()
    return _query_classifier


def dispatch(query: str) -> StructuredResponse:
    """Module-level shortcut for the default dispatcher."""
    return get_query_classifier().dispatch(query)
