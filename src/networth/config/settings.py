"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory based on platform."""
    return Path.home() / "Documents" / "Net Worth Data"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Net Worth Engine"
    app_version: str = "0.1.0"

    # Data directory (backend ledger database lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Output formatting, applied uniformly to every view
    display_currency: str = "USD"
    date_format: str = "YYYY-MM-DD"
    locale: str = "en-US"
    timezone: str = "US/Eastern"
    default_time_range: str = "1Y"

    # Market data settings
    market_data_provider: str = "stub"
    market_data_cache_ttl_seconds: int = 60
    price_history_lookback_days: int = 3650

    # Engine behavior
    holding_tolerance: float = 0.0001
    transfer_category: str = "Transfer"
    uncategorized_label: str = "Uncategorized"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "ledger.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
