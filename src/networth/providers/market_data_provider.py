"""Market data provider protocol."""

from datetime import date
from typing import Protocol

from networth.domain.models import PricePoint
from networth.domain.views import Quote


class MarketDataProvider(Protocol):
    """
    Protocol for market data providers.

    Symbols are stock tickers or FX pair symbols in the ``BASEQUOTE=X`` form.
    Implementations may raise on transport failures; callers degrade gracefully.
    """

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """
        Fetch live quotes for multiple symbols.

        Returns dict mapping symbol -> Quote. Missing symbols are omitted from result.
        """
        ...

    def get_daily_closes(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        """Fetch daily closing prices for ``symbol`` with ``start <= date <= end``."""
        ...
