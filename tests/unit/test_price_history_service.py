"""
Unit tests for PriceHistoryService and the Yahoo provider's parsing.

Tests cover:
- Incremental fetch window (lookback vs. day after last stored point)
- Per-symbol failure isolation
- yfinance history frames with NaN closes
- yfinance quote info mapping
"""

import logging
from datetime import timedelta

import pandas as pd
import pytest

from networth.domain.models import PricePoint
from networth.providers import yahoo_provider
from networth.providers.yahoo_provider import YahooMarketDataProvider, _clean_float
from networth.services import PriceHistoryService

from tests.conftest import DeterministicMarketProvider, day


TODAY = day("2024-06-10")


def _closes(start: str, count: int, price: float = 100.0) -> dict:
    first = day(start)
    return {first + timedelta(days=i): price + i for i in range(count)}


# =============================================================================
# UPDATE WINDOW TESTS
# =============================================================================


class TestUpdateDailyPrices:
    """Tests for incremental daily price refresh."""

    def test_first_fetch_uses_lookback(self, price_repo):
        """
        GIVEN nothing stored for AAPL
        WHEN I refresh with a 5-day lookback
        THEN the provider is asked for [today - 5, today] and the points are stored
        """
        provider = DeterministicMarketProvider({"AAPL": _closes("2024-06-05", 6)})
        service = PriceHistoryService(price_repo, provider, lookback_days=5)

        written = service.update_daily_prices(["aapl"], TODAY)

        assert provider.close_calls == [("AAPL", day("2024-06-05"), TODAY)]
        assert written == {"AAPL": 6}
        assert len(service.get_daily_prices("AAPL")) == 6

    def test_second_fetch_starts_after_last_stored_day(self, price_repo):
        price_repo.upsert_many([PricePoint("AAPL", day("2024-06-07"), 101.0)])
        provider = DeterministicMarketProvider({"AAPL": _closes("2024-06-08", 3)})
        service = PriceHistoryService(price_repo, provider, lookback_days=365)

        written = service.update_daily_prices(["AAPL"], TODAY)

        assert provider.close_calls == [("AAPL", day("2024-06-08"), TODAY)]
        assert written == {"AAPL": 3}
        assert [p.date for p in service.get_daily_prices("AAPL")][0] == day("2024-06-07")

    def test_up_to_date_symbol_is_not_fetched(self, price_repo):
        price_repo.upsert_many([PricePoint("AAPL", TODAY, 101.0)])
        provider = DeterministicMarketProvider()
        service = PriceHistoryService(price_repo, provider)

        written = service.update_daily_prices(["AAPL"], TODAY)

        assert provider.close_calls == []
        assert written == {"AAPL": 0}

    def test_failing_symbol_is_skipped(self, price_repo, caplog):
        """
        GIVEN a provider that fails for one symbol
        WHEN I refresh two symbols
        THEN the other symbol is still stored and a warning is logged
        """
        class PartlyFailing(DeterministicMarketProvider):
            def get_daily_closes(self, symbol, start, end):
                if symbol == "BAD":
                    raise ConnectionError("boom")
                return super().get_daily_closes(symbol, start, end)

        provider = PartlyFailing({"MSFT": _closes("2024-06-10", 1)})
        service = PriceHistoryService(price_repo, provider, lookback_days=3)

        with caplog.at_level(logging.WARNING):
            written = service.update_daily_prices(["BAD", "MSFT"], TODAY)

        assert written == {"MSFT": 1}
        assert "BAD" in caplog.text


# =============================================================================
# YAHOO PROVIDER TESTS
# =============================================================================


class _FakeTicker:
    def __init__(self, frame=None, info=None):
        self._frame = frame
        self.info = info

    def history(self, **kwargs):
        return self._frame


class TestYahooProvider:
    """Tests for parsing yfinance responses (network calls are replaced)."""

    def test_daily_closes_drop_nan(self, monkeypatch):
        """
        GIVEN a history frame with a NaN close
        WHEN I fetch daily closes
        THEN the NaN day is dropped and timestamps become calendar days
        """
        index = pd.to_datetime(["2024-06-03", "2024-06-04", "2024-06-05"]).tz_localize("America/New_York")
        frame = pd.DataFrame({"Close": [100.0, float("nan"), 102.0]}, index=index)
        monkeypatch.setattr(yahoo_provider.yf, "Ticker", lambda symbol: _FakeTicker(frame=frame))

        points = YahooMarketDataProvider().get_daily_closes("aapl", day("2024-06-03"), day("2024-06-05"))

        assert [(p.symbol, p.date, p.price) for p in points] == [
            ("AAPL", day("2024-06-03"), 100.0),
            ("AAPL", day("2024-06-05"), 102.0),
        ]

    def test_empty_history(self, monkeypatch):
        monkeypatch.setattr(yahoo_provider.yf, "Ticker", lambda symbol: _FakeTicker(frame=pd.DataFrame()))

        assert YahooMarketDataProvider().get_daily_closes("AAPL", day("2024-06-03"), TODAY) == []

    def test_quotes_from_info(self, monkeypatch):
        class _FakeTickers:
            def __init__(self, symbols: str):
                self.tickers = {
                    "AAPL": _FakeTicker(info={
                        "regularMarketPrice": 190.0,
                        "regularMarketChangePercent": 1.2,
                        "quoteType": "EQUITY",
                    }),
                    "GONE": _FakeTicker(info={"regularMarketPrice": None}),
                }

        monkeypatch.setattr(yahoo_provider.yf, "Tickers", _FakeTickers)

        quotes = YahooMarketDataProvider().get_quotes(["AAPL", "GONE"])

        assert list(quotes) == ["AAPL"]
        assert quotes["AAPL"].price == 190.0
        assert quotes["AAPL"].quote_type == "EQUITY"

    @pytest.mark.parametrize("raw,expected", [
        (1.5, 1.5),
        ("2", 2.0),
        (float("nan"), None),
        (None, None),
        ("n/a", None),
    ])
    def test_clean_float(self, raw, expected):
        assert _clean_float(raw) == expected
