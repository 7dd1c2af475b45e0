"""View models for the net-worth time series."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ValuationSnapshot:
    """Net worth on one calendar day, in the display currency."""

    date: date
    total: float


@dataclass(frozen=True)
class AccountSeries:
    """
    Per-account breakdown of the net-worth series.

    ``native_values`` are in the account currency, ``values`` are converted to the
    display currency. Breakdown series are hidden unless explicitly made visible.
    """

    account_id: str
    account_name: str
    currency: str
    dates: tuple[date, ...] = field(default_factory=tuple)
    native_values: tuple[float, ...] = field(default_factory=tuple)
    values: tuple[float, ...] = field(default_factory=tuple)
    visible: bool = False


@dataclass(frozen=True)
class DataQualityReport:
    """
    Diagnostics gathered while valuing a series.

    ``missing_prices`` counts, per symbol, the (day, symbol) lookups that found no
    price at or before the day and therefore valued at 0. ``fx_fallbacks`` counts, per
    pair symbol, conversions that fell back to a rate of 1.0.
    """

    missing_prices: dict[str, int] = field(default_factory=dict)
    fx_fallbacks: dict[str, int] = field(default_factory=dict)
    oversold_tickers: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return not (self.missing_prices or self.fx_fallbacks or self.oversold_tickers)


@dataclass(frozen=True)
class NetWorthSeries:
    """Daily net-worth series plus optional per-account breakdown."""

    currency: str
    snapshots: tuple[ValuationSnapshot, ...] = field(default_factory=tuple)
    accounts: tuple[AccountSeries, ...] = field(default_factory=tuple)
    quality: DataQualityReport = field(default_factory=DataQualityReport)

    @property
    def latest(self) -> Optional[ValuationSnapshot]:
        return self.snapshots[-1] if self.snapshots else None
