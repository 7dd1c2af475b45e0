"""View models for holdings, quotes, allocation and the treemap."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Position:
    """Reconstructed position for one ticker (average-cost)."""

    ticker: str
    shares: float = 0.0
    cost_basis: float = 0.0

    @property
    def average_cost(self) -> float:
        return self.cost_basis / self.shares if self.shares > 0 else 0.0


@dataclass(frozen=True)
class Quote:
    """Live market quote for a symbol."""

    symbol: str
    price: float
    change_percent: float = 0.0
    quote_type: Optional[str] = None
    as_of: Optional[datetime] = None


@dataclass(frozen=True)
class Holding:
    """Current holding priced at the live quote."""

    ticker: str
    shares: float
    cost_basis: float
    price: float
    value: float
    roi: float
    change_percent: float = 0.0
    quote_type: Optional[str] = None


@dataclass(frozen=True)
class AllocationItem:
    """Single item in the asset-type breakdown."""

    label: str
    value: float
    percentage: float


@dataclass(frozen=True)
class AllocationView:
    """Asset-type breakdown in the display currency."""

    items: tuple[AllocationItem, ...] = field(default_factory=tuple)
    total_value: float = 0.0
    currency: str = "USD"


@dataclass(frozen=True)
class TreemapRect:
    """Leaf of the treemap: a holding laid out in a sub-rectangle of the root."""

    ticker: str
    x: float
    y: float
    w: float
    h: float
    value: float
    roi: float
    color: str

    @property
    def area(self) -> float:
        return self.w * self.h
