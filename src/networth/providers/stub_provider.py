"""Stub market data provider for offline/testing use."""

import random
from datetime import date, timedelta

from networth.core.timezone import now_in
from networth.domain.models import PricePoint
from networth.domain.views import Quote


# Deterministic fake prices for common symbols: (price, change %, quote type)
_STUB_PRICES: dict[str, tuple[float, float, str]] = {
    "AAPL": (185.50, 0.68, "EQUITY"),
    "GOOGL": (142.75, 0.88, "EQUITY"),
    "MSFT": (378.25, 0.38, "EQUITY"),
    "AMZN": (178.50, 0.71, "EQUITY"),
    "TSLA": (248.75, -0.54, "EQUITY"),
    "NVDA": (485.25, 0.57, "EQUITY"),
    "SPY": (485.25, 0.24, "ETF"),
    "QQQ": (418.75, 0.30, "ETF"),
    "VTI": (252.30, 0.20, "ETF"),
    "BTC-USD": (64250.00, 1.85, "CRYPTOCURRENCY"),
    "USDEUR=X": (0.92, 0.0, "CURRENCY"),
    "EURUSD=X": (1.087, 0.0, "CURRENCY"),
    "USDGBP=X": (0.79, 0.0, "CURRENCY"),
    "GBPUSD=X": (1.266, 0.0, "CURRENCY"),
}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; derives a stable price for unknown
    symbols from the symbol itself. Daily closes are weekday-only and flat at the
    live price, so weekends exercise carry-forward.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._seed = seed

    def _price_for(self, symbol: str) -> tuple[float, float, str]:
        if symbol in _STUB_PRICES:
            return _STUB_PRICES[symbol]
        rng = random.Random(f"{self._seed}:{symbol}")
        price = round(50 + rng.random() * 200, 2)
        change = round((rng.random() - 0.5) * 4, 2)
        quote_type = "CURRENCY" if symbol.endswith("=X") else "EQUITY"
        return price, change, quote_type

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """Return stub quotes for requested symbols."""
        as_of = now_in()
        result: dict[str, Quote] = {}

        for symbol in symbols:
            upper_symbol = symbol.upper()
            price, change, quote_type = self._price_for(upper_symbol)
            result[upper_symbol] = Quote(
                symbol=upper_symbol,
                price=price,
                change_percent=change,
                quote_type=quote_type,
                as_of=as_of,
            )

        return result

    def get_daily_closes(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        """Return one close per weekday in [start, end]."""
        upper_symbol = symbol.upper()
        price, _, _ = self._price_for(upper_symbol)
        points = []
        d = start
        while d <= end:
            if d.weekday() < 5:
                points.append(PricePoint(symbol=upper_symbol, date=d, price=price))
            d += timedelta(days=1)
        return points
