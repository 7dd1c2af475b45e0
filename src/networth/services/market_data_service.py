"""Market data service for live quotes."""

import logging
from datetime import datetime
from typing import Optional

from networth.core.timezone import now_in
from networth.domain.views import Quote
from networth.providers.market_data_provider import MarketDataProvider

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for fetching live quotes.

    Wraps provider with caching and graceful degradation.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache_ttl_seconds: int = 60,
    ):
        self._provider = provider
        self._cache_ttl = cache_ttl_seconds
        self._quote_cache: dict[str, Quote] = {}
        self._cache_time: Optional[datetime] = None

    @property
    def provider(self) -> MarketDataProvider:
        return self._provider

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        """
        Fetch quotes for symbols with caching.

        Returns dict mapping upper-cased symbol -> Quote.
        Uses cached data if within TTL; falls back to cache on provider failure.
        """
        if not symbols:
            return {}

        symbols = list(dict.fromkeys(s.upper() for s in symbols))

        if self._is_cache_valid():
            cached_result = {s: self._quote_cache[s] for s in symbols if s in self._quote_cache}
            missing = [s for s in symbols if s not in cached_result]
            if not missing:
                return cached_result
        else:
            missing = symbols
            cached_result = {}

        try:
            new_quotes = self._provider.get_quotes(missing)
        except Exception as e:
            # Graceful degradation: return whatever is in cache, even if stale
            logger.warning("Quote fetch failed for %s, using cached quotes: %s", missing, e)
            cached_result.update(
                {s: self._quote_cache[s] for s in missing if s in self._quote_cache}
            )
        else:
            self._quote_cache.update(new_quotes)
            self._cache_time = now_in()
            cached_result.update(new_quotes)

        return {s: cached_result[s] for s in symbols if s in cached_result}

    def invalidate(self) -> None:
        """Drop the cache so the next call goes to the provider."""
        self._quote_cache.clear()
        self._cache_time = None

    def _is_cache_valid(self) -> bool:
        """Check if cache is within TTL."""
        if not self._cache_time:
            return False
        elapsed = (now_in() - self._cache_time).total_seconds()
        return elapsed < self._cache_ttl
