"""
In-memory price series store with carry-forward lookup.

Holds daily points for stock tickers and FX pair symbols alike. A store is built
once from a fetched snapshot and never mutated; ``with_series`` returns a new store.
"""

from bisect import bisect_right
from collections import Counter
from datetime import date
from typing import Iterable, Mapping, Optional

from networth.domain.models import PricePoint


class PriceSeries:
    """Time-ordered prices for one symbol, indexed by date."""

    def __init__(self, symbol: str, points: Iterable[tuple[date, float]]):
        self.symbol = symbol.upper()
        by_date: dict[date, float] = {}
        for day, price in points:
            by_date[day] = float(price)
        self._by_date = by_date
        self._dates = sorted(by_date)
        self._prices = [by_date[d] for d in self._dates]

    def __len__(self) -> int:
        return len(self._dates)

    @property
    def first_date(self) -> Optional[date]:
        return self._dates[0] if self._dates else None

    @property
    def last_date(self) -> Optional[date]:
        return self._dates[-1] if self._dates else None

    def at_or_before(self, day: date) -> Optional[float]:
        """Exact-date price, else the last price dated before ``day``; None if none."""
        exact = self._by_date.get(day)
        if exact is not None:
            return exact
        idx = bisect_right(self._dates, day) - 1
        if idx < 0:
            return None
        return self._prices[idx]


class MissingPriceTracker:
    """Counts lookups that degraded to a fallback value."""

    def __init__(self) -> None:
        self.missing_prices: Counter = Counter()
        self.fx_fallbacks: Counter = Counter()

    def record_missing_price(self, symbol: str) -> None:
        self.missing_prices[symbol] += 1

    def record_fx_fallback(self, pair_symbol: str) -> None:
        self.fx_fallbacks[pair_symbol] += 1


class PriceSeriesStore:
    """Immutable collection of PriceSeries keyed by upper-cased symbol."""

    def __init__(self, series: Optional[Mapping[str, PriceSeries]] = None):
        self._series: dict[str, PriceSeries] = dict(series or {})

    @classmethod
    def from_points(cls, points: Iterable[PricePoint]) -> "PriceSeriesStore":
        grouped: dict[str, list[tuple[date, float]]] = {}
        for point in points:
            grouped.setdefault(point.symbol.upper(), []).append((point.date, point.price))
        return cls({sym: PriceSeries(sym, pts) for sym, pts in grouped.items()})

    def with_series(self, symbol: str, points: Iterable[tuple[date, float]]) -> "PriceSeriesStore":
        """Return a new store with ``symbol`` replaced."""
        series = dict(self._series)
        series[symbol.upper()] = PriceSeries(symbol, points)
        return PriceSeriesStore(series)

    def __contains__(self, symbol: str) -> bool:
        return symbol.upper() in self._series

    @property
    def symbols(self) -> list[str]:
        return sorted(self._series)

    def get(self, symbol: str) -> Optional[PriceSeries]:
        return self._series.get(symbol.upper())

    def find(self, symbol: str, day: date) -> Optional[float]:
        """Carry-forward lookup returning None when nothing is known at or before ``day``."""
        series = self._series.get(symbol.upper())
        if series is None:
            return None
        return series.at_or_before(day)

    def lookup(
        self,
        symbol: str,
        day: date,
        tracker: Optional[MissingPriceTracker] = None,
    ) -> float:
        """
        Asset price on ``day`` with carry-forward.

        Returns 0.0 for unknown symbols or days before the first point, so missing
        data undervalues rather than fails.
        """
        price = self.find(symbol, day)
        if price is None:
            if tracker is not None:
                tracker.record_missing_price(symbol.upper())
            return 0.0
        return price
