"""
Unit tests for MarketDataService.

Tests cover:
- Getting quotes from provider
- Quote caching behavior
- Cache TTL expiration and invalidation
- Graceful degradation on provider failure
- Stub provider determinism
"""

from datetime import timedelta
from unittest.mock import MagicMock

from networth.core.timezone import now_in
from networth.domain.views import Quote
from networth.providers import StubMarketDataProvider
from networth.services import MarketDataService

from tests.conftest import (
    DeterministicMarketProvider,
    FailingMarketProvider,
    day,
)


def _quote(symbol: str, price: float) -> Quote:
    return Quote(symbol=symbol, price=price, change_percent=0.5, quote_type="EQUITY")


# =============================================================================
# BASIC QUOTE RETRIEVAL TESTS
# =============================================================================


class TestGetQuotes:
    """Tests for basic quote retrieval."""

    def test_get_quotes_returns_quote_data(
        self,
        market_data_service: MarketDataService,
    ):
        """
        GIVEN a market data provider with AAPL quote
        WHEN I call get_quotes(["AAPL"])
        THEN result contains Quote with price, change and type
        """
        quotes = market_data_service.get_quotes(["AAPL"])

        quote = quotes["AAPL"]
        assert quote.symbol == "AAPL"
        assert quote.price == 185.50
        assert quote.change_percent == 0.68
        assert quote.quote_type == "EQUITY"

    def test_get_quotes_empty_list_returns_empty_dict(
        self,
        deterministic_provider: DeterministicMarketProvider,
        market_data_service: MarketDataService,
    ):
        """
        GIVEN any provider
        WHEN I call get_quotes([])
        THEN result is empty dict and the provider is not called
        """
        assert market_data_service.get_quotes([]) == {}
        assert deterministic_provider.quote_calls == []

    def test_get_quotes_normalizes_and_deduplicates(
        self,
        deterministic_provider: DeterministicMarketProvider,
        market_data_service: MarketDataService,
    ):
        """
        GIVEN a provider
        WHEN I request lowercase and duplicated symbols
        THEN symbols are upper-cased and requested once
        """
        quotes = market_data_service.get_quotes(["aapl", "AAPL", "msft"])

        assert set(quotes) == {"AAPL", "MSFT"}
        assert deterministic_provider.quote_calls == [["AAPL", "MSFT"]]

    def test_get_quotes_unknown_symbol_not_in_result(
        self,
        market_data_service: MarketDataService,
    ):
        quotes = market_data_service.get_quotes(["AAPL", "UNKNOWN_SYMBOL"])

        assert "AAPL" in quotes
        assert "UNKNOWN_SYMBOL" not in quotes


# =============================================================================
# CACHING TESTS
# =============================================================================


class TestQuoteCaching:
    """Tests for quote caching behavior."""

    def test_cache_hit_does_not_call_provider(self):
        """
        GIVEN cache TTL is 60 seconds
        WHEN I call get_quotes twice within TTL
        THEN provider is called only once
        """
        mock_provider = MagicMock()
        mock_provider.get_quotes.return_value = {"AAPL": _quote("AAPL", 185.50)}
        service = MarketDataService(provider=mock_provider, cache_ttl_seconds=60)

        quotes1 = service.get_quotes(["AAPL"])
        quotes2 = service.get_quotes(["AAPL"])

        assert mock_provider.get_quotes.call_count == 1
        assert quotes1 == quotes2

    def test_cache_miss_for_new_symbol_calls_provider(self):
        """
        GIVEN AAPL is cached
        WHEN I request AAPL and MSFT
        THEN provider is called for MSFT only
        """
        requested = []

        def fake_get_quotes(symbols):
            requested.append(list(symbols))
            return {s: _quote(s, 100.0) for s in symbols}

        mock_provider = MagicMock()
        mock_provider.get_quotes = fake_get_quotes
        service = MarketDataService(provider=mock_provider, cache_ttl_seconds=60)

        service.get_quotes(["AAPL"])
        quotes = service.get_quotes(["AAPL", "MSFT"])

        assert requested == [["AAPL"], ["MSFT"]]
        assert len(quotes) == 2

    def test_cache_expiry_calls_provider_again(self):
        mock_provider = MagicMock()
        mock_provider.get_quotes.return_value = {"AAPL": _quote("AAPL", 185.50)}
        service = MarketDataService(provider=mock_provider, cache_ttl_seconds=1)

        service.get_quotes(["AAPL"])
        service._cache_time = now_in() - timedelta(hours=1)
        service.get_quotes(["AAPL"])

        assert mock_provider.get_quotes.call_count == 2

    def test_invalidate_forces_refetch(self):
        mock_provider = MagicMock()
        mock_provider.get_quotes.return_value = {"AAPL": _quote("AAPL", 185.50)}
        service = MarketDataService(provider=mock_provider, cache_ttl_seconds=60)

        service.get_quotes(["AAPL"])
        service.invalidate()
        service.get_quotes(["AAPL"])

        assert mock_provider.get_quotes.call_count == 2


# =============================================================================
# FALLBACK / GRACEFUL DEGRADATION TESTS
# =============================================================================


class TestGracefulDegradation:
    """Tests for graceful degradation on provider failure."""

    def test_fallback_to_stale_cache_on_provider_failure(self):
        """
        GIVEN AAPL quote is cached from previous call
        AND provider is now failing
        WHEN I call get_quotes after the TTL
        THEN the stale cached quote is returned
        """
        calls = {"n": 0}

        def flaky_get_quotes(symbols):
            calls["n"] += 1
            if calls["n"] == 1:
                return {"AAPL": _quote("AAPL", 185.50)}
            raise ConnectionError("Network unavailable")

        mock_provider = MagicMock()
        mock_provider.get_quotes = flaky_get_quotes
        service = MarketDataService(provider=mock_provider, cache_ttl_seconds=1)

        service.get_quotes(["AAPL"])
        service._cache_time = now_in() - timedelta(hours=1)
        quotes = service.get_quotes(["AAPL"])

        assert quotes["AAPL"].price == 185.50

    def test_provider_failure_with_no_cache_returns_empty(self, failing_provider: FailingMarketProvider):
        service = MarketDataService(provider=failing_provider, cache_ttl_seconds=60)

        assert service.get_quotes(["AAPL"]) == {}


# =============================================================================
# STUB PROVIDER TESTS
# =============================================================================


class TestStubProvider:
    """Tests for the offline stub provider."""

    def test_known_symbol_price(self):
        quote = StubMarketDataProvider().get_quotes(["aapl"])["AAPL"]

        assert quote.price == 185.50
        assert quote.as_of is not None

    def test_unknown_symbol_is_deterministic(self):
        first = StubMarketDataProvider(seed=7).get_quotes(["ZZZZ"])["ZZZZ"]
        second = StubMarketDataProvider(seed=7).get_quotes(["ZZZZ"])["ZZZZ"]

        assert first.price == second.price
        assert 50 <= first.price <= 250

    def test_daily_closes_skip_weekends(self):
        """
        GIVEN a range covering a weekend (2024-06-07 is a Friday)
        WHEN I fetch daily closes
        THEN only weekdays are returned
        """
        points = StubMarketDataProvider().get_daily_closes("AAPL", day("2024-06-07"), day("2024-06-10"))

        assert [p.date for p in points] == [day("2024-06-07"), day("2024-06-10")]
        assert all(p.price == 185.50 for p in points)
