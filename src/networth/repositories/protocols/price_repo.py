"""Daily price repository protocol."""

from datetime import date
from typing import Protocol, Optional

from networth.domain.models import PricePoint


class PriceRepository(Protocol):
    """Interface for the daily price table (stock tickers and FX pair symbols)."""

    def list_by_symbol(self, symbol: str) -> list[PricePoint]:
        """List stored points for a symbol, ordered by date."""
        ...

    def latest_date(self, symbol: str) -> Optional[date]:
        """Return the most recent stored date for a symbol."""
        ...

    def upsert_many(self, points: list[PricePoint]) -> int:
        """Insert or replace points by (symbol, date). Returns the number written."""
        ...
