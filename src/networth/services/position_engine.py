"""Position reconstruction from the transaction log (average-cost method)."""

import logging
from datetime import date
from typing import Iterable, Optional

from networth.domain.models import InvestmentTransaction, Transaction
from networth.domain.views import Position

logger = logging.getLogger(__name__)

HOLDING_TOLERANCE = 0.0001


def roi_percent(value: float, cost_basis: float) -> float:
    """Return on investment in percent; 0 when there is no positive cost basis."""
    if cost_basis <= 0:
        return 0.0
    return (value - cost_basis) / cost_basis * 100


def apply_trade(position: Position, txn: InvestmentTransaction) -> Position:
    """
    Apply one trade to a position and return the new position.

    Buys add ``price_per_share * shares + fee`` to cost basis. Sells remove shares at
    the running average cost. Selling more than is held is not rejected: shares go
    negative and cost basis stops at 0.
    """
    qty = txn.shares
    if qty > 0:
        return Position(
            ticker=position.ticker,
            shares=position.shares + qty,
            cost_basis=position.cost_basis + txn.price_per_share * qty + txn.fee,
        )
    if qty < 0:
        sold = abs(qty)
        avg_cost = position.cost_basis / position.shares if position.shares > 0 else 0.0
        return Position(
            ticker=position.ticker,
            shares=position.shares - sold,
            cost_basis=max(0.0, position.cost_basis - sold * avg_cost),
        )
    return position


def _sorted_trades(
    transactions: Iterable[Transaction],
    until: Optional[date] = None,
    account_id: Optional[str] = None,
) -> list[InvestmentTransaction]:
    trades = [
        t for t in transactions
        if isinstance(t, InvestmentTransaction)
        and (until is None or t.date <= until)
        and (account_id is None or t.account_id == account_id)
    ]
    # Stable sort keeps log order for same-day trades
    trades.sort(key=lambda t: t.date)
    return trades


class PositionEngine:
    """
    Replays investment transactions into per-ticker positions.

    Stateless: every call derives positions from the transactions it is given.
    """

    def __init__(self, tolerance: float = HOLDING_TOLERANCE):
        self._tolerance = tolerance

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def replay(
        self,
        transactions: Iterable[Transaction],
        until: Optional[date] = None,
        account_id: Optional[str] = None,
    ) -> dict[str, Position]:
        """
        Reconstruct positions as of ``until`` (inclusive; None means all time).

        Restrict to one account with ``account_id``; otherwise positions are pooled
        across accounts.
        """
        positions: dict[str, Position] = {}
        for txn in _sorted_trades(transactions, until, account_id):
            current = positions.get(txn.ticker) or Position(ticker=txn.ticker)
            positions[txn.ticker] = apply_trade(current, txn)
        return positions

    def is_held(self, position: Position) -> bool:
        """A position counts as a current holding when shares exceed the tolerance."""
        return position.shares > self._tolerance

    def current_holdings(
        self,
        transactions: Iterable[Transaction],
        until: Optional[date] = None,
        account_id: Optional[str] = None,
    ) -> list[Position]:
        positions = self.replay(transactions, until, account_id)
        return [p for p in positions.values() if self.is_held(p)]

    def find_oversold(self, transactions: Iterable[Transaction]) -> list[str]:
        """
        Tickers where some sell exceeded the shares held in its account at that point.
        """
        oversold: set[str] = set()
        books: dict[tuple[str, str], Position] = {}
        for txn in _sorted_trades(transactions):
            key = (txn.account_id, txn.ticker)
            current = books.get(key) or Position(ticker=txn.ticker)
            if txn.shares < 0 and abs(txn.shares) > current.shares + self._tolerance:
                if txn.ticker not in oversold:
                    logger.warning(
                        "Sell of %s %s in account %s on %s exceeds %s shares held",
                        abs(txn.shares), txn.ticker, txn.account_id, txn.date, current.shares,
                    )
                oversold.add(txn.ticker)
            books[key] = apply_trade(current, txn)
        return sorted(oversold)
