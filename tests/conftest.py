"""
Pytest configuration and fixtures for net worth engine tests.

This module provides:
- In-memory SQLite database fixtures
- Factory helpers for accounts, transactions and price points
- Deterministic and failing market data providers
- An in-memory async ledger backend
- FastAPI test client wired to the test database
"""

import asyncio
from datetime import date, timedelta
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from networth.main import app
from networth.api.deps import get_dashboard_service
from networth.repositories.sqlalchemy.database import Base, reset_database
# Import ORM models to register them with Base before creating tables
from networth.repositories.sqlalchemy import orm_models  # noqa: F401
from networth.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyPriceRepository,
)
from networth.config.settings import Settings, set_settings, reset_settings
from networth.core.timezone import parse_iso_date, today_in
from networth.domain.models import (
    Account,
    AccountKind,
    CashTransaction,
    InvestmentTransaction,
    PricePoint,
)
from networth.domain.views import Quote
from networth.services import (
    DashboardService,
    MarketDataService,
    PriceSeriesStore,
    RepositoryBackend,
)


# =============================================================================
# DATE HELPERS
# =============================================================================


def day(value: str) -> date:
    """Shorthand for an ISO calendar day."""
    return parse_iso_date(value)


# =============================================================================
# FACTORY HELPERS
# =============================================================================

_counter = {"n": 0}


def _next_id(prefix: str) -> str:
    _counter["n"] += 1
    return f"{prefix}-{_counter['n']}"


def make_account(
    id: Optional[str] = None,
    name: Optional[str] = None,
    kind: AccountKind = AccountKind.CASH,
    balance: float = 0.0,
    currency: Optional[str] = None,
) -> Account:
    account_id = id or _next_id("acc")
    return Account(
        id=account_id,
        name=name or f"Account {account_id}",
        kind=kind,
        balance=balance,
        currency=currency,
    )


def make_cash(
    account_id: str,
    on: str,
    amount: float,
    category: Optional[str] = None,
    payee: str = "",
    currency: Optional[str] = None,
    id: Optional[str] = None,
) -> CashTransaction:
    return CashTransaction(
        id=id or _next_id("tx"),
        account_id=account_id,
        date=day(on),
        amount=amount,
        payee=payee,
        category=category,
        currency=currency,
    )


def make_trade(
    account_id: str,
    on: str,
    ticker: str,
    shares: float,
    price_per_share: float,
    fee: float = 0.0,
    amount: Optional[float] = None,
    category: Optional[str] = None,
    currency: Optional[str] = None,
    id: Optional[str] = None,
) -> InvestmentTransaction:
    """Trade whose cash effect defaults to -(shares * price + fee) on buys."""
    if amount is None:
        gross = shares * price_per_share
        amount = -(gross + fee) if shares > 0 else abs(gross) - fee
    return InvestmentTransaction(
        id=id or _next_id("tx"),
        account_id=account_id,
        date=day(on),
        amount=amount,
        ticker=ticker.upper(),
        shares=shares,
        price_per_share=price_per_share,
        fee=fee,
        category=category,
        currency=currency,
    )


def make_store(series: dict[str, list[tuple[str, float]]]) -> PriceSeriesStore:
    """Build a store from {symbol: [(iso_day, price), ...]}."""
    return PriceSeriesStore.from_points(
        PricePoint(symbol=symbol, date=day(d), price=p)
        for symbol, points in series.items()
        for d, p in points
    )


def assert_close(actual: float, expected: float, tolerance: float = 1e-6) -> None:
    """Assert two floats are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(test_engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def test_session(session_factory) -> Session:
    """Create test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def price_repo(test_session) -> SqlAlchemyPriceRepository:
    """Provide test PriceRepository."""
    return SqlAlchemyPriceRepository(test_session)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicMarketProvider:
    """
    Deterministic market data provider for testing.

    Quotes are fixed; daily closes come from ``closes`` (symbol -> {day: price}).
    """

    FIXED_QUOTES = {
        "AAPL": (185.50, 0.68, "EQUITY"),
        "MSFT": (378.25, 0.38, "EQUITY"),
        "VTI": (250.00, 0.20, "ETF"),
        "BTC-USD": (60000.00, 1.50, "CRYPTOCURRENCY"),
    }

    def __init__(self, closes: Optional[dict[str, dict[date, float]]] = None):
        self.closes = closes or {}
        self.quote_calls: list[list[str]] = []
        self.close_calls: list[tuple[str, date, date]] = []

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        self.quote_calls.append(list(symbols))
        result = {}
        for symbol in symbols:
            upper_symbol = symbol.upper()
            if upper_symbol in self.FIXED_QUOTES:
                price, change, quote_type = self.FIXED_QUOTES[upper_symbol]
                result[upper_symbol] = Quote(
                    symbol=upper_symbol,
                    price=price,
                    change_percent=change,
                    quote_type=quote_type,
                )
        return result

    def get_daily_closes(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        self.close_calls.append((symbol, start, end))
        by_day = self.closes.get(symbol.upper(), {})
        return [
            PricePoint(symbol=symbol.upper(), date=d, price=p)
            for d, p in sorted(by_day.items())
            if start <= d <= end
        ]


class FailingMarketProvider:
    """Market provider that always raises an exception."""

    def get_quotes(self, symbols: list[str]) -> dict[str, Quote]:
        raise ConnectionError("Network unavailable")

    def get_daily_closes(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        raise ConnectionError("Network unavailable")


@pytest.fixture
def deterministic_provider() -> DeterministicMarketProvider:
    """Provide deterministic market data provider."""
    return DeterministicMarketProvider()


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


@pytest.fixture
def market_data_service(deterministic_provider) -> MarketDataService:
    """Provide test MarketDataService with deterministic provider."""
    return MarketDataService(
        provider=deterministic_provider,
        cache_ttl_seconds=60,
    )


# =============================================================================
# LEDGER BACKEND FIXTURES
# =============================================================================


class InMemoryBackend:
    """
    Async ledger backend over plain lists.

    ``gate`` (an asyncio.Event) holds the next get_all_transactions call until set,
    to simulate a slow fetch; ``waiting`` is True while that call is held.
    ``fail`` makes every fetch raise.
    """

    def __init__(self, accounts=None, transactions=None, prices=None):
        self.accounts = list(accounts or [])
        self.transactions = list(transactions or [])
        self.prices: dict[str, list[PricePoint]] = dict(prices or {})
        self.gate: Optional[asyncio.Event] = None
        self.waiting = False
        self.fail = False
        self.fail_price_update = False
        self.updated_symbols: list[list[str]] = []

    async def get_accounts(self):
        if self.fail:
            raise ConnectionError("Backend unavailable")
        return list(self.accounts)

    async def get_all_transactions(self):
        snapshot = list(self.transactions)
        gate, self.gate = self.gate, None
        if gate is not None:
            self.waiting = True
            await gate.wait()
            self.waiting = False
        if self.fail:
            raise ConnectionError("Backend unavailable")
        return snapshot

    async def update_daily_prices(self, symbols):
        if self.fail_price_update:
            raise ConnectionError("Price refresh unavailable")
        self.updated_symbols.append(list(symbols))

    async def get_daily_prices(self, symbol):
        return list(self.prices.get(symbol, []))


@pytest.fixture
def test_settings() -> Settings:
    """Settings with defaults, independent of the environment's .env."""
    return Settings(_env_file=None, database_url="sqlite:///:memory:")


@pytest.fixture
def dashboard_factory(test_settings, market_data_service) -> Callable[..., DashboardService]:
    """Factory for DashboardService over a given backend."""

    def _create(backend) -> DashboardService:
        return DashboardService(
            backend=backend,
            market_data=market_data_service,
            settings=test_settings,
        )

    return _create


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(session_factory, deterministic_provider, test_settings) -> TestClient:
    """Provide FastAPI test client reading the test database."""
    set_settings(test_settings)
    reset_database()
    dashboard = DashboardService(
        backend=RepositoryBackend(
            session_factory=session_factory,
            provider=deterministic_provider,
            lookback_days=30,
        ),
        market_data=MarketDataService(deterministic_provider, cache_ttl_seconds=60),
        settings=test_settings,
    )

    app.dependency_overrides[get_dashboard_service] = lambda: dashboard
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


def recent(days_ago: int) -> str:
    """ISO day ``days_ago`` days before the real today (for API tests)."""
    return (today_in() - timedelta(days=days_ago)).isoformat()
