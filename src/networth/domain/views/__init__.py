"""View models for service outputs."""

from networth.domain.views.portfolio import (
    Position,
    Quote,
    Holding,
    AllocationItem,
    AllocationView,
    TreemapRect,
)
from networth.domain.views.networth import (
    ValuationSnapshot,
    AccountSeries,
    DataQualityReport,
    NetWorthSeries,
)
from networth.domain.views.cashflow import (
    CategoryTotal,
    IncomeExpenseBucket,
    IncomeExpenseSeries,
    FlowNode,
    FlowEdge,
    FlowGraph,
)

__all__ = [
    "Position",
    "Quote",
    "Holding",
    "AllocationItem",
    "AllocationView",
    "TreemapRect",
    "ValuationSnapshot",
    "AccountSeries",
    "DataQualityReport",
    "NetWorthSeries",
    "CategoryTotal",
    "IncomeExpenseBucket",
    "IncomeExpenseSeries",
    "FlowNode",
    "FlowEdge",
    "FlowGraph",
]
