"""
Category classifiers for the cash-flow graph.

The default classifier is a case-insensitive substring match, so a category such as
"Deposit refund" is treated as investment-like. Swap in another ``CategoryClassifier``
(e.g. a rule table) to change that without touching the aggregation code.
"""

from typing import Iterable, Protocol

DEFAULT_INVESTMENT_KEYWORDS = ("invest", "savings", "brokerage", "deposit")


class CategoryClassifier(Protocol):
    def is_investment(self, category: str) -> bool:
        """Return True when an outflow in ``category`` moves money into savings."""
        ...


class KeywordInvestmentClassifier:
    """Investment-like when the lowercased category contains any keyword."""

    def __init__(self, keywords: Iterable[str] = DEFAULT_INVESTMENT_KEYWORDS):
        self._keywords = tuple(k.lower() for k in keywords)

    def is_investment(self, category: str) -> bool:
        lower = (category or "").lower()
        return any(k in lower for k in self._keywords)


class CategorySetClassifier:
    """Investment-like when the category is one of an explicit set (exact, case-insensitive)."""

    def __init__(self, categories: Iterable[str]):
        self._categories = {c.strip().lower() for c in categories}

    def is_investment(self, category: str) -> bool:
        return (category or "").strip().lower() in self._categories
