"""Market data providers module."""

from networth.providers.market_data_provider import MarketDataProvider
from networth.providers.stub_provider import StubMarketDataProvider
from networth.providers.yahoo_provider import YahooMarketDataProvider

__all__ = [
    "MarketDataProvider",
    "StubMarketDataProvider",
    "YahooMarketDataProvider",
]
