"""Yahoo Finance market data provider (via yfinance)."""

import logging
import math
from datetime import date, timedelta
from typing import Optional

import pandas as pd
import yfinance as yf

from networth.core.timezone import now_in
from networth.domain.models import PricePoint
from networth.domain.views import Quote

logger = logging.getLogger(__name__)


def _clean_float(value) -> Optional[float]:
    """Return a finite float or None (yfinance fills gaps with NaN)."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class YahooMarketDataProvider:
    """
    Fetches quotes and daily closes from Yahoo Finance.

    FX pairs are requested with the same ``BASEQUOTE=X`` symbols Yahoo uses.
    """

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """Fetch live quotes; symbols that fail individually are omitted."""
        if not symbols:
            return {}
        as_of = now_in()
        tickers = yf.Tickers(" ".join(s.upper() for s in symbols))
        result: dict[str, Quote] = {}
        for symbol in (s.upper() for s in symbols):
            ticker = tickers.tickers.get(symbol)
            if ticker is None:
                continue
            try:
                info = ticker.info
            except Exception as e:
                logger.warning("Quote lookup failed for %s: %s", symbol, e)
                continue
            if not isinstance(info, dict):
                continue
            price = _clean_float(info.get("regularMarketPrice") or info.get("currentPrice"))
            if price is None:
                continue
            change = _clean_float(info.get("regularMarketChangePercent")) or 0.0
            result[symbol] = Quote(
                symbol=symbol,
                price=price,
                change_percent=change,
                quote_type=info.get("quoteType"),
                as_of=as_of,
            )
        return result

    def get_daily_closes(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        """Fetch daily closes in [start, end]; NaN closes are dropped."""
        upper_symbol = symbol.upper()
        history = yf.Ticker(upper_symbol).history(
            start=start,
            end=end + timedelta(days=1),
            interval="1d",
            auto_adjust=False,
        )
        if history is None or history.empty or "Close" not in history.columns:
            return []

        closes = history["Close"].dropna()
        points = []
        for idx, close in closes.items():
            day = pd.Timestamp(idx).date()
            price = _clean_float(close)
            if price is None or day < start or day > end:
                continue
            points.append(PricePoint(symbol=upper_symbol, date=day, price=price))
        return points
