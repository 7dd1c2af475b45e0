"""Application context for in-process service management.

Holds the long-lived services (market data cache, dashboard views and their
refresh generation) so every request shares them.
"""

from pathlib import Path
from typing import Optional

from networth.config.settings import Settings, set_settings, get_settings
from networth.repositories.sqlalchemy.database import (
    get_session_factory,
    init_db_with_path,
    reset_database,
)
from networth.providers import (
    MarketDataProvider,
    StubMarketDataProvider,
    YahooMarketDataProvider,
)
from networth.services import (
    DashboardService,
    MarketDataService,
    RepositoryBackend,
)
from networth.repositories.protocols import LedgerBackend


def build_provider(name: str) -> MarketDataProvider:
    """Market data provider selected by ``settings.market_data_provider``."""
    if name.strip().lower() == "yahoo":
        return YahooMarketDataProvider()
    return StubMarketDataProvider()


class AppContext:
    """
    Application context providing in-process access to the services.

    Services are created lazily from the current settings and reused until
    ``initialize`` is called again.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = data_dir
        self._initialized = False

        # Service instances (lazy initialized)
        self._provider: Optional[MarketDataProvider] = None
        self._market_data_service: Optional[MarketDataService] = None
        self._backend: Optional[LedgerBackend] = None
        self._dashboard_service: Optional[DashboardService] = None

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """
        Point the context at a ledger directory and reset every service.

        Args:
            data_dir: Data directory path. Uses default if not provided.
        """
        if data_dir:
            self._data_dir = data_dir

        settings = Settings(data_dir=self._data_dir)
        set_settings(settings)

        reset_database()
        init_db_with_path(settings.get_data_dir() / "ledger.db")

        self._provider = None
        self._market_data_service = None
        self._backend = None
        self._dashboard_service = None
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def provider(self) -> MarketDataProvider:
        if self._provider is None:
            self._provider = build_provider(get_settings().market_data_provider)
        return self._provider

    @property
    def market_data(self) -> MarketDataService:
        """Get the MarketDataService instance."""
        if self._market_data_service is None:
            settings = get_settings()
            self._market_data_service = MarketDataService(
                provider=self.provider,
                cache_ttl_seconds=settings.market_data_cache_ttl_seconds,
            )
        return self._market_data_service

    @property
    def backend(self) -> LedgerBackend:
        """Get the ledger backend (SQLAlchemy repositories + price refresh)."""
        if self._backend is None:
            settings = get_settings()
            self._backend = RepositoryBackend(
                session_factory=get_session_factory(),
                provider=self.provider,
                lookback_days=settings.price_history_lookback_days,
            )
        return self._backend

    @property
    def dashboard(self) -> DashboardService:
        """Get the DashboardService instance."""
        if self._dashboard_service is None:
            self._dashboard_service = DashboardService(
                backend=self.backend,
                market_data=self.market_data,
                settings=get_settings(),
            )
        return self._dashboard_service


# Global application context
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear) the global application context."""
    global _app_context
    _app_context = context
