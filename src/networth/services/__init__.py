"""Service layer - valuation, aggregation and refresh orchestration."""

from networth.services.price_store import PriceSeries, PriceSeriesStore, MissingPriceTracker
from networth.services.currency import CurrencyConverter, fx_symbol
from networth.services.position_engine import PositionEngine, roi_percent, HOLDING_TOLERANCE
from networth.services.date_range import DateRange, resolve_date_range, bucket_granularity
from networth.services.valuation_service import ValuationService, cash_balance_on, initial_balance
from networth.services.classifiers import CategoryClassifier, KeywordInvestmentClassifier
from networth.services.aggregation_service import AggregationService
from networth.services.treemap import layout, roi_color
from networth.services.market_data_service import MarketDataService
from networth.services.price_history_service import PriceHistoryService
from networth.services.analysis_service import AnalysisService
from networth.services.ledger_backend import RepositoryBackend, required_price_symbols
from networth.services.dashboard_service import (
    DashboardParams,
    DashboardService,
    DashboardViews,
    LedgerSnapshot,
    build_dashboard_views,
)

__all__ = [
    "PriceSeries",
    "PriceSeriesStore",
    "MissingPriceTracker",
    "CurrencyConverter",
    "fx_symbol",
    "PositionEngine",
    "roi_percent",
    "HOLDING_TOLERANCE",
    "DateRange",
    "resolve_date_range",
    "bucket_granularity",
    "ValuationService",
    "initial_balance",
    "cash_balance_on",
    "CategoryClassifier",
    "KeywordInvestmentClassifier",
    "AggregationService",
    "layout",
    "roi_color",
    "MarketDataService",
    "PriceHistoryService",
    "AnalysisService",
    "RepositoryBackend",
    "required_price_symbols",
    "DashboardParams",
    "DashboardService",
    "DashboardViews",
    "LedgerSnapshot",
    "build_dashboard_views",
]
