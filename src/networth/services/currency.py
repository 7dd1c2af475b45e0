"""Currency conversion over FX pair symbols in the price store."""

from datetime import date
from typing import Optional

from networth.services.price_store import MissingPriceTracker, PriceSeriesStore


def fx_symbol(base: str, quote: str) -> str:
    """Synthetic pair symbol, e.g. ``fx_symbol("USD", "EUR") == "USDEUR=X"``."""
    return f"{base.upper()}{quote.upper()}=X"


class CurrencyConverter:
    """
    Resolves conversion rates through the price store.

    Unlike asset prices, a missing (or zero) rate falls back to 1.0 so a balance is
    never zeroed by absent FX data.
    """

    def __init__(
        self,
        store: PriceSeriesStore,
        tracker: Optional[MissingPriceTracker] = None,
    ):
        self._store = store
        self._tracker = tracker

    def rate(self, base: str, quote: str, day: date) -> float:
        if not base or not quote or base.upper() == quote.upper():
            return 1.0
        pair = fx_symbol(base, quote)
        price = self._store.find(pair, day)
        if not price:
            if self._tracker is not None:
                self._tracker.record_fx_fallback(pair)
            return 1.0
        return price

    def convert(self, amount: float, base: str, quote: str, day: date) -> float:
        return amount * self.rate(base, quote, day)
