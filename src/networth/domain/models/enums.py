"""Enumerations for domain models."""

from enum import Enum


class AccountKind(str, Enum):
    """Kinds of accounts tracked by the ledger."""

    CASH = "cash"
    BROKERAGE = "brokerage"
    OTHER = "other"


class TimeRange(str, Enum):
    """Range selector for time-indexed views."""

    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    YEAR_TO_DATE = "YTD"
    ONE_YEAR = "1Y"
    ALL = "ALL"
    CUSTOM = "CUSTOM"


class BucketGranularity(str, Enum):
    """Bucket size for the income-vs-expenses series."""

    DAY = "day"
    MONTH = "month"


class FlowNodeKind(str, Enum):
    """Node roles in the cash-flow graph."""

    INCOME = "income"
    BUDGET = "budget"
    DEFICIT = "deficit"
    INVESTMENTS = "investments"
    SAVINGS = "savings"
    EXPENSES = "expenses"
    INVESTMENT_CATEGORY = "investment_category"
    EXPENSE_CATEGORY = "expense_category"
