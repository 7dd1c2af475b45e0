"""
LedgerBackend implementation over the SQLAlchemy repositories.

Each call opens its own session and runs the blocking work in a worker thread, so the
event loop only ever awaits request/response style calls.
"""

import asyncio
import logging
from contextlib import contextmanager
from datetime import date
from typing import Callable, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from networth.core.exceptions import BackendError
from networth.core.timezone import today_in
from networth.domain.models import Account, InvestmentTransaction, PricePoint, Transaction
from networth.providers.market_data_provider import MarketDataProvider
from networth.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyPriceRepository,
    SqlAlchemyTransactionRepository,
)
from networth.services.currency import fx_symbol
from networth.services.price_history_service import PriceHistoryService

logger = logging.getLogger(__name__)


def required_price_symbols(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    display_currency: str,
) -> list[str]:
    """
    Every symbol a valuation needs: each traded ticker, the pair from a trade's
    recorded currency to its account currency when they differ, and the pair from
    each account currency to the display currency when they differ.
    """
    display_currency = display_currency.upper()
    accounts = list(accounts)
    currency_of = {a.id: a.currency_or(display_currency) for a in accounts}
    symbols: dict[str, None] = {}
    for t in transactions:
        if isinstance(t, InvestmentTransaction):
            symbols[t.ticker] = None
        account_currency = currency_of.get(t.account_id, display_currency)
        if t.currency and t.currency != account_currency:
            symbols[fx_symbol(t.currency, account_currency)] = None
    for account in accounts:
        account_currency = currency_of[account.id]
        if account_currency != display_currency:
            symbols[fx_symbol(account_currency, display_currency)] = None
    return list(symbols)


class RepositoryBackend:
    """Async ledger backend reading accounts/transactions and refreshing daily prices."""

    def __init__(
        self,
        session_factory: sessionmaker,
        provider: MarketDataProvider,
        lookback_days: int = 3650,
        today: Optional[Callable[[], date]] = None,
    ):
        self._session_factory = session_factory
        self._provider = provider
        self._lookback_days = lookback_days
        self._today = today or today_in

    @contextmanager
    def _session(self):
        """Session scope that reports database failures as BackendError."""
        try:
            with self._session_factory() as db:
                yield db
        except SQLAlchemyError as e:
            raise BackendError(f"Ledger database error: {e}") from e

    def _list_accounts(self) -> list[Account]:
        with self._session() as db:
            return SqlAlchemyAccountRepository(db).list_all()

    def _list_transactions(self) -> list[Transaction]:
        with self._session() as db:
            return SqlAlchemyTransactionRepository(db).list_all()

    def _refresh_prices(self, symbols: list[str]) -> None:
        with self._session() as db:
            service = PriceHistoryService(
                SqlAlchemyPriceRepository(db), self._provider, self._lookback_days
            )
            service.update_daily_prices(symbols, self._today())

    def _list_prices(self, symbol: str) -> list[PricePoint]:
        with self._session() as db:
            return SqlAlchemyPriceRepository(db).list_by_symbol(symbol)

    async def get_accounts(self) -> list[Account]:
        return await asyncio.to_thread(self._list_accounts)

    async def get_all_transactions(self) -> list[Transaction]:
        return await asyncio.to_thread(self._list_transactions)

    async def update_daily_prices(self, symbols: list[str]) -> None:
        if not symbols:
            return
        logger.debug("Refreshing daily prices for %d symbols", len(symbols))
        await asyncio.to_thread(self._refresh_prices, symbols)

    async def get_daily_prices(self, symbol: str) -> list[PricePoint]:
        return await asyncio.to_thread(self._list_prices, symbol)
