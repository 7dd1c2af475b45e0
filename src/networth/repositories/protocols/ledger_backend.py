"""Asynchronous ledger backend protocol."""

from typing import Protocol

from networth.domain.models import Account, PricePoint, Transaction


class LedgerBackend(Protocol):
    """
    Request/response boundary to the backend that owns accounts, transactions and
    daily prices. Every call may suspend; nothing here is cached.
    """

    async def get_accounts(self) -> list[Account]:
        ...

    async def get_all_transactions(self) -> list[Transaction]:
        ...

    async def update_daily_prices(self, symbols: list[str]) -> None:
        """Ask the backend to refresh its stored daily prices for ``symbols``."""
        ...

    async def get_daily_prices(self, symbol: str) -> list[PricePoint]:
        ...
