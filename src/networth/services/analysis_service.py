"""Live portfolio analytics: holdings, market values, net worth, allocation, treemap."""

from collections import defaultdict
from datetime import date
from typing import Optional

from networth.domain.models import Account, AccountKind, InvestmentTransaction, Transaction
from networth.domain.views import (
    AllocationItem,
    AllocationView,
    Holding,
    Quote,
    TreemapRect,
)
from networth.services.currency import CurrencyConverter
from networth.services.position_engine import PositionEngine, roi_percent
from networth.services.treemap import Rect, TreemapItem, layout
from networth.services.valuation_service import ticker_currencies

# Balances at or below this magnitude are left out of the allocation
ALLOCATION_MIN_BALANCE = 1.0

_ASSET_TYPES = {
    "EQUITY": "Stock",
    "ETF": "ETF",
    "CRYPTOCURRENCY": "Crypto",
    "MUTUALFUND": "Mutual Fund",
    "FUTURE": "Future",
    "INDEX": "Index",
    "COMMODITY": "Commodities",
}


def asset_type(quote: Optional[Quote]) -> str:
    """Allocation label for a quote type; unknown or missing types count as Stock."""
    if quote is None or not quote.quote_type:
        return "Stock"
    return _ASSET_TYPES.get(quote.quote_type.upper(), "Stock")


class AnalysisService:
    """
    Portfolio analytics over the current transaction log and live quotes.

    Quotes are passed in rather than fetched so every view computed for one refresh
    sees the same prices.
    """

    def __init__(self, position_engine: Optional[PositionEngine] = None):
        self._positions = position_engine or PositionEngine()

    def holdings(
        self,
        transactions: list[Transaction],
        quotes: dict[str, Quote],
        account_id: Optional[str] = None,
    ) -> list[Holding]:
        """Current holdings priced at live quotes (0 when unquoted), largest first."""
        result = []
        for position in self._positions.current_holdings(transactions, account_id=account_id):
            quote = quotes.get(position.ticker)
            price = quote.price if quote else 0.0
            value = position.shares * price
            result.append(
                Holding(
                    ticker=position.ticker,
                    shares=position.shares,
                    cost_basis=position.cost_basis,
                    price=price,
                    value=value,
                    roi=roi_percent(value, position.cost_basis),
                    change_percent=quote.change_percent if quote else 0.0,
                    quote_type=quote.quote_type if quote else None,
                )
            )
        result.sort(key=lambda h: h.value, reverse=True)
        return result

    def market_values(
        self,
        transactions: list[Transaction],
        quotes: dict[str, Quote],
    ) -> dict[str, float]:
        """
        Per account, the live value of its open positions.

        Every account that has traded shares gets an entry, even when its positions
        are now closed.
        """
        shares: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(float))
        for t in transactions:
            if isinstance(t, InvestmentTransaction) and t.shares:
                shares[t.account_id][t.ticker] += t.shares

        values: dict[str, float] = {}
        for account_id, by_ticker in shares.items():
            total = 0.0
            for ticker, qty in by_ticker.items():
                if qty > self._positions.tolerance:
                    quote = quotes.get(ticker)
                    total += qty * (quote.price if quote else 0.0)
            values[account_id] = total
        return values

    def current_net_worth(
        self,
        accounts: list[Account],
        market_values: dict[str, float],
        converter: CurrencyConverter,
        today: date,
        display_currency: str,
    ) -> float:
        """
        Live net worth in the display currency.

        Brokerage accounts count at their live market value when one is known,
        otherwise at their balance; other accounts count at their balance.
        """
        total = 0.0
        for account in accounts:
            if account.kind == AccountKind.BROKERAGE and account.id in market_values:
                value = market_values[account.id]
            else:
                value = account.balance
            total += converter.convert(
                value, account.currency_or(display_currency), display_currency, today
            )
        return total

    def allocation(
        self,
        accounts: list[Account],
        transactions: list[Transaction],
        quotes: dict[str, Quote],
        converter: CurrencyConverter,
        today: date,
        display_currency: str,
    ) -> AllocationView:
        """
        Breakdown of net worth by asset type.

        Accounts holding positions are treated as brokerage accounts: positions go to
        their asset type and the balance to Cash. A brokerage account without
        positions is assumed to track its holdings in the balance, which counts as
        Stock. Item values keep their sign; percentages are of the total magnitude.
        """
        tx_currencies = ticker_currencies(transactions)
        buckets: dict[str, float] = defaultdict(float)

        for account in accounts:
            account_currency = account.currency_or(display_currency)
            to_display = converter.rate(account_currency, display_currency, today)
            held = self._positions.current_holdings(transactions, account_id=account.id)
            balance = account.balance * to_display

            if held or account.kind == AccountKind.BROKERAGE:
                for position in held:
                    quote = quotes.get(position.ticker)
                    price = quote.price if quote else 0.0
                    ticker_currency = tx_currencies.get(position.ticker, account_currency)
                    value = (
                        position.shares
                        * price
                        * converter.rate(ticker_currency, account_currency, today)
                        * to_display
                    )
                    buckets[asset_type(quote)] += value
                if not held and abs(balance) > ALLOCATION_MIN_BALANCE:
                    buckets["Stock"] += balance
                elif abs(balance) > ALLOCATION_MIN_BALANCE:
                    buckets["Cash"] += balance
            else:
                label = "Cash" if account.kind == AccountKind.CASH else account.kind.value.capitalize()
                buckets[label] += balance

        magnitude = sum(abs(v) for v in buckets.values())
        items = [
            AllocationItem(
                label=label,
                value=value,
                percentage=abs(value) / magnitude * 100 if magnitude else 0.0,
            )
            for label, value in buckets.items()
        ]
        items.sort(key=lambda i: abs(i.value), reverse=True)
        return AllocationView(
            items=tuple(items),
            total_value=sum(buckets.values()),
            currency=display_currency,
        )

    def treemap(
        self,
        holdings: list[Holding],
        width: float = 100.0,
        height: float = 100.0,
    ) -> tuple[TreemapRect, ...]:
        """Lay out positive-valued holdings, largest first, in a ``width`` x ``height`` box."""
        items = [
            TreemapItem(ticker=h.ticker, value=h.value, roi=h.roi)
            for h in sorted(holdings, key=lambda h: h.value, reverse=True)
        ]
        return layout(items, Rect(0.0, 0.0, width, height))
