"""Domain models package."""

from networth.domain.models.enums import (
    AccountKind,
    TimeRange,
    BucketGranularity,
    FlowNodeKind,
)
from networth.domain.models.account import Account, parse_account, parse_kind
from networth.domain.models.transaction import (
    CashTransaction,
    InvestmentTransaction,
    Transaction,
    parse_transaction,
    parse_transactions,
)
from networth.domain.models.price import PricePoint

__all__ = [
    "AccountKind",
    "TimeRange",
    "BucketGranularity",
    "FlowNodeKind",
    "Account",
    "parse_account",
    "parse_kind",
    "CashTransaction",
    "InvestmentTransaction",
    "Transaction",
    "parse_transaction",
    "parse_transactions",
    "PricePoint",
]
