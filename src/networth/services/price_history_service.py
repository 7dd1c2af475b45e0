"""
Daily price history refresh.

Keeps the backend's daily price table current: each symbol is fetched from the day
after its last stored point (or ``lookback_days`` back when nothing is stored) up to
today. Fetches are incremental and never delete stored points.
"""

import logging
from datetime import date, timedelta

from networth.domain.models import PricePoint
from networth.providers.market_data_provider import MarketDataProvider
from networth.repositories.protocols import PriceRepository

logger = logging.getLogger(__name__)


class PriceHistoryService:
    """Incrementally refreshes stored daily closes from a market data provider."""

    def __init__(
        self,
        price_repo: PriceRepository,
        provider: MarketDataProvider,
        lookback_days: int = 3650,
    ):
        self._prices = price_repo
        self._provider = provider
        self._lookback_days = lookback_days

    def update_daily_prices(self, symbols: list[str], today: date) -> dict[str, int]:
        """
        Fetch and store missing closes for each symbol.

        Returns the number of points written per symbol. A symbol whose fetch fails
        is logged and skipped; the others are still refreshed.
        """
        written: dict[str, int] = {}
        for symbol in dict.fromkeys(s.upper() for s in symbols if s):
            last = self._prices.latest_date(symbol)
            start = last + timedelta(days=1) if last else today - timedelta(days=self._lookback_days)
            if start > today:
                written[symbol] = 0
                continue
            try:
                points = self._provider.get_daily_closes(symbol, start, today)
            except Exception as e:
                logger.warning("Price history refresh failed for %s: %s", symbol, e)
                continue
            written[symbol] = self._prices.upsert_many(
                [p for p in points if start <= p.date <= today]
            )
            logger.debug("Stored %d daily prices for %s", written[symbol], symbol)
        return written

    def get_daily_prices(self, symbol: str) -> list[PricePoint]:
        return self._prices.list_by_symbol(symbol)
