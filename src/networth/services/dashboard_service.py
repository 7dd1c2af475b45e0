"""
Dashboard refresh: fetch a frozen ledger snapshot, then recompute every view.

Fetching is the only place that suspends. Each refresh takes a generation number; a
refresh whose fetch completes after a newer refresh has started is discarded, so a
slow, stale fetch can never overwrite newer views.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from networth.config.settings import Settings
from networth.core.exceptions import ValidationError
from networth.core.timezone import now_in, today_in
from networth.domain.models import Account, InvestmentTransaction, TimeRange, Transaction
from networth.domain.views import (
    AllocationView,
    CategoryTotal,
    FlowGraph,
    Holding,
    IncomeExpenseSeries,
    NetWorthSeries,
    Quote,
    TreemapRect,
)
from networth.repositories.protocols import LedgerBackend
from networth.services.aggregation_service import AggregationService
from networth.services.analysis_service import AnalysisService
from networth.services.classifiers import CategoryClassifier
from networth.services.currency import CurrencyConverter
from networth.services.date_range import DateRange, parse_time_range, resolve_date_range
from networth.services.ledger_backend import required_price_symbols
from networth.services.market_data_service import MarketDataService
from networth.services.position_engine import PositionEngine
from networth.services.price_store import PriceSeriesStore
from networth.services.valuation_service import ValuationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerSnapshot:
    """Inputs fetched for one refresh. Never mutated once built."""

    accounts: tuple[Account, ...]
    transactions: tuple[Transaction, ...]
    store: PriceSeriesStore
    quotes: dict[str, Quote] = field(default_factory=dict)

    @property
    def first_transaction_date(self) -> Optional[date]:
        return min((t.date for t in self.transactions), default=None)


@dataclass(frozen=True)
class DashboardParams:
    """What to show: range selector, display currency, visible breakdown series."""

    time_range: TimeRange = TimeRange.ONE_YEAR
    custom_start: Optional[date] = None
    custom_end: Optional[date] = None
    display_currency: str = "USD"
    today: Optional[date] = None
    visible_account_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "time_range", parse_time_range(self.time_range))
        object.__setattr__(self, "display_currency", self.display_currency.strip().upper())
        if self.time_range == TimeRange.CUSTOM:
            if self.custom_start is None or self.custom_end is None:
                raise ValidationError("Custom range requires both start and end dates")
            if self.custom_start > self.custom_end:
                raise ValidationError("Custom range start must not be after its end")


@dataclass(frozen=True)
class DashboardViews:
    """Every derived view of one refresh, in the display currency."""

    params: DashboardParams
    today: date
    date_range: DateRange
    net_worth: NetWorthSeries
    current_net_worth: float
    allocation: AllocationView
    expenses_by_category: tuple[CategoryTotal, ...]
    income_vs_expenses: IncomeExpenseSeries
    cash_flow: FlowGraph
    holdings: tuple[Holding, ...]
    treemap: tuple[TreemapRect, ...]
    generation: int = 0
    generated_at: Optional[datetime] = None
    snapshot: Optional[LedgerSnapshot] = None


def build_dashboard_views(
    snapshot: LedgerSnapshot,
    params: DashboardParams,
    today: date,
    settings: Settings,
    classifier: Optional[CategoryClassifier] = None,
    generation: int = 0,
) -> DashboardViews:
    """Recompute every view from ``snapshot``. Pure apart from logging."""
    accounts = list(snapshot.accounts)
    transactions = list(snapshot.transactions)
    currency = params.display_currency
    engine = PositionEngine(settings.holding_tolerance)
    analysis = AnalysisService(engine)
    aggregation = AggregationService(
        classifier=classifier,
        transfer_category=settings.transfer_category,
        uncategorized_label=settings.uncategorized_label,
        date_format=settings.date_format,
    )
    converter = CurrencyConverter(snapshot.store)

    first_date = snapshot.first_transaction_date
    chart_range = resolve_date_range(
        params.time_range, today, first_date, params.custom_start, params.custom_end,
    )
    period_range = resolve_date_range(
        params.time_range, today, first_date, params.custom_start, params.custom_end,
        clamp_to_first_transaction=False,
    )

    market_values = analysis.market_values(transactions, snapshot.quotes)
    live_total = analysis.current_net_worth(accounts, market_values, converter, today, currency)

    if accounts:
        net_worth = ValuationService(settings.holding_tolerance).build_series(
            accounts,
            transactions,
            snapshot.store,
            chart_range,
            currency,
            current_total_value=live_total,
            visible_account_ids=params.visible_account_ids,
        )
    else:
        net_worth = NetWorthSeries(currency=currency)

    holdings = analysis.holdings(transactions, snapshot.quotes)
    return DashboardViews(
        params=params,
        today=today,
        date_range=chart_range,
        net_worth=net_worth,
        current_net_worth=live_total,
        allocation=analysis.allocation(
            accounts, transactions, snapshot.quotes, converter, today, currency
        ),
        expenses_by_category=tuple(
            aggregation.expenses_by_category(accounts, transactions, converter, period_range, currency)
        ),
        income_vs_expenses=aggregation.income_vs_expenses(
            accounts, transactions, converter, period_range, currency
        ),
        cash_flow=aggregation.cash_flow(accounts, transactions, converter, period_range, currency),
        holdings=tuple(holdings),
        treemap=analysis.treemap(holdings),
        generation=generation,
        generated_at=now_in(settings.timezone),
        snapshot=snapshot,
    )


class DashboardService:
    """
    Owns the latest dashboard views and refreshes them from the ledger backend.

    Views are replaced wholesale; a failed or superseded refresh leaves the published
    views (possibly None) in place.
    """

    def __init__(
        self,
        backend: LedgerBackend,
        market_data: MarketDataService,
        settings: Settings,
        classifier: Optional[CategoryClassifier] = None,
    ):
        self._backend = backend
        self._market = market_data
        self._settings = settings
        self._classifier = classifier
        self._generation = 0
        self._views: Optional[DashboardViews] = None

    @property
    def views(self) -> Optional[DashboardViews]:
        return self._views

    @property
    def generation(self) -> int:
        return self._generation

    def default_params(self) -> DashboardParams:
        return DashboardParams(
            time_range=parse_time_range(self._settings.default_time_range),
            display_currency=self._settings.display_currency,
        )

    async def refresh(self, params: Optional[DashboardParams] = None) -> Optional[DashboardViews]:
        """
        Fetch a fresh snapshot and recompute every view.

        Returns views built for ``params``, or the previous views when the fetch
        failed. A refresh superseded while waiting still returns its own views but
        does not publish them as ``self.views``.
        """
        params = params or self.default_params()
        self._generation += 1
        generation = self._generation

        try:
            snapshot = await self.fetch_snapshot(params.display_currency)
        except Exception:
            logger.exception("Ledger fetch failed; keeping previous dashboard views")
            return self._views

        today = params.today or today_in(self._settings.timezone)
        views = build_dashboard_views(
            snapshot, params, today, self._settings, self._classifier, generation
        )
        if generation != self._generation:
            # Answer this caller, but never publish over a newer refresh
            logger.info(
                "Dashboard refresh %d superseded by %d; not publishing",
                generation, self._generation,
            )
            return views

        self._views = views
        return views

    async def fetch_snapshot(self, display_currency: str) -> LedgerSnapshot:
        """Fetch accounts, transactions, stored prices and live quotes."""
        accounts, transactions = await asyncio.gather(
            self._backend.get_accounts(),
            self._backend.get_all_transactions(),
        )
        symbols = required_price_symbols(accounts, transactions, display_currency)

        try:
            await self._backend.update_daily_prices(symbols)
        except Exception as e:
            logger.warning("Daily price refresh failed; using stored prices: %s", e)

        series = await asyncio.gather(*(self._backend.get_daily_prices(s) for s in symbols))
        store = PriceSeriesStore.from_points(p for points in series for p in points)

        tickers = list(dict.fromkeys(
            t.ticker for t in transactions if isinstance(t, InvestmentTransaction)
        ))
        quotes = await asyncio.to_thread(self._market.get_quotes, tickers) if tickers else {}
        return LedgerSnapshot(
            accounts=tuple(accounts),
            transactions=tuple(transactions),
            store=store,
            quotes=quotes,
        )
