"""
Net-worth time-series builder.

Historical balances are back-solved from each account's authoritative current
balance: ``initial = balance - sum(amounts)``; the balance on day ``d`` is
``initial + sum(amounts dated <= d)``. Holdings on ``d`` are the running share
totals of trades dated on or before ``d``, valued at the carry-forward price.
"""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from networth.domain.models import (
    Account,
    InvestmentTransaction,
    Transaction,
)
from networth.domain.views import (
    AccountSeries,
    DataQualityReport,
    NetWorthSeries,
    Position,
    ValuationSnapshot,
)
from networth.services.currency import CurrencyConverter
from networth.services.date_range import DateRange
from networth.services.position_engine import HOLDING_TOLERANCE, PositionEngine, apply_trade
from networth.services.price_store import MissingPriceTracker, PriceSeriesStore


def initial_balance(account: Account, transactions: Iterable[Transaction]) -> float:
    """Balance before the first recorded transaction of ``account``."""
    total = sum(t.amount for t in transactions if t.account_id == account.id)
    return account.balance - total


def cash_balance_on(account: Account, transactions: list[Transaction], day: date) -> float:
    """Cash balance of ``account`` at the end of ``day``."""
    change = sum(t.amount for t in transactions if t.account_id == account.id and t.date <= day)
    return initial_balance(account, transactions) + change


def ticker_currencies(transactions: Iterable[Transaction]) -> dict[str, str]:
    """Currency of each ticker as recorded on its trades (the last recorded one wins)."""
    currencies: dict[str, str] = {}
    for t in transactions:
        if isinstance(t, InvestmentTransaction) and t.currency:
            currencies[t.ticker] = t.currency
    return currencies


class _AccountCursor:
    """Running state of one account while walking the calendar forward."""

    def __init__(self, account: Account, transactions: list[Transaction], opening: float):
        self.account = account
        self._pending = sorted(transactions, key=lambda t: t.date)
        self._next = 0
        self.cash = opening
        self.positions: dict[str, Position] = {}

    def advance_to(self, day: date) -> None:
        """Apply every transaction dated on or before ``day`` not yet applied."""
        while self._next < len(self._pending) and self._pending[self._next].date <= day:
            txn = self._pending[self._next]
            self.cash += txn.amount
            if isinstance(txn, InvestmentTransaction):
                current = self.positions.get(txn.ticker) or Position(ticker=txn.ticker)
                self.positions[txn.ticker] = apply_trade(current, txn)
            self._next += 1


class ValuationService:
    """Builds daily net-worth series in the display currency."""

    def __init__(self, tolerance: float = HOLDING_TOLERANCE):
        self._tolerance = tolerance
        self._positions = PositionEngine(tolerance)

    def build_series(
        self,
        accounts: list[Account],
        transactions: list[Transaction],
        store: PriceSeriesStore,
        date_range: DateRange,
        display_currency: str,
        current_total_value: Optional[float] = None,
        visible_account_ids: Optional[Iterable[str]] = None,
    ) -> NetWorthSeries:
        """
        One snapshot per calendar day of ``date_range``.

        When ``current_total_value`` is given it replaces the total of the last day,
        so the series ends on the live valuation. Per-account series are left as
        reconstructed.
        """
        tracker = MissingPriceTracker()
        converter = CurrencyConverter(store, tracker)
        tx_currencies = ticker_currencies(transactions)
        visible = set(visible_account_ids or ())

        by_account: dict[str, list[Transaction]] = defaultdict(list)
        for t in transactions:
            by_account[t.account_id].append(t)

        cursors = []
        for account in accounts:
            account_txns = by_account.get(account.id, [])
            opening = account.balance - sum(t.amount for t in account_txns)
            cursors.append(_AccountCursor(account, account_txns, opening))

        days: list[date] = []
        totals: list[float] = []
        native: dict[str, list[float]] = {a.id: [] for a in accounts}
        converted: dict[str, list[float]] = {a.id: [] for a in accounts}

        for day in date_range.iter_days():
            total = 0.0
            for cursor in cursors:
                cursor.advance_to(day)
                account_currency = cursor.account.currency_or(display_currency)
                stock_value = 0.0
                for ticker, position in cursor.positions.items():
                    if abs(position.shares) <= self._tolerance:
                        continue
                    price = store.lookup(ticker, day, tracker)
                    ticker_currency = tx_currencies.get(ticker, account_currency)
                    stock_value += position.shares * price * converter.rate(
                        ticker_currency, account_currency, day
                    )
                value = cursor.cash + stock_value
                value_display = value * converter.rate(account_currency, display_currency, day)
                native[cursor.account.id].append(value)
                converted[cursor.account.id].append(value_display)
                total += value_display
            days.append(day)
            totals.append(total)

        if totals and current_total_value is not None:
            totals[-1] = current_total_value

        day_tuple = tuple(days)
        account_series = tuple(
            AccountSeries(
                account_id=a.id,
                account_name=a.name,
                currency=a.currency_or(display_currency),
                dates=day_tuple,
                native_values=tuple(native[a.id]),
                values=tuple(converted[a.id]),
                visible=a.id in visible,
            )
            for a in accounts
        )
        quality = DataQualityReport(
            missing_prices=dict(tracker.missing_prices),
            fx_fallbacks=dict(tracker.fx_fallbacks),
            oversold_tickers=tuple(self._positions.find_oversold(transactions)),
        )
        return NetWorthSeries(
            currency=display_currency,
            snapshots=tuple(ValuationSnapshot(d, v) for d, v in zip(days, totals)),
            accounts=account_series,
            quality=quality,
        )
