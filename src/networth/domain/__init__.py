"""Domain layer - pure models and views with no external dependencies."""

from networth.domain.models import (
    Account,
    AccountKind,
    CashTransaction,
    InvestmentTransaction,
    Transaction,
    PricePoint,
    TimeRange,
    BucketGranularity,
    FlowNodeKind,
)

__all__ = [
    "Account",
    "AccountKind",
    "CashTransaction",
    "InvestmentTransaction",
    "Transaction",
    "PricePoint",
    "TimeRange",
    "BucketGranularity",
    "FlowNodeKind",
]
