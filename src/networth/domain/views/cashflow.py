"""View models for expense, income and cash-flow aggregations."""

from dataclasses import dataclass, field
from datetime import date

from networth.domain.models.enums import BucketGranularity, FlowNodeKind


@dataclass(frozen=True)
class CategoryTotal:
    """Total spent in one category, in the display currency."""

    category: str
    amount: float


@dataclass(frozen=True)
class IncomeExpenseBucket:
    """Income and expense totals for one day or month bucket."""

    start: date
    label: str
    income: float = 0.0
    expense: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expense


@dataclass(frozen=True)
class IncomeExpenseSeries:
    granularity: BucketGranularity
    buckets: tuple[IncomeExpenseBucket, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FlowNode:
    """Node of the cash-flow graph. ``priority`` only orders the layout."""

    id: str
    label: str
    kind: FlowNodeKind
    priority: int


@dataclass(frozen=True)
class FlowEdge:
    from_node: str
    to_node: str
    amount: float
    priority: int


@dataclass(frozen=True)
class FlowGraph:
    """Sankey-style cash-flow decomposition."""

    nodes: tuple[FlowNode, ...] = field(default_factory=tuple)
    edges: tuple[FlowEdge, ...] = field(default_factory=tuple)
    total_income: float = 0.0
    total_expense: float = 0.0
    total_investment: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.edges
