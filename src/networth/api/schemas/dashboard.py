"""Pydantic schemas for dashboard endpoints."""

from typing import Optional

from pydantic import BaseModel


class DataQualityResponse(BaseModel):
    """Lookups that fell back to a default while valuing the series."""

    missing_prices: dict[str, int] = {}
    fx_fallbacks: dict[str, int] = {}
    oversold_tickers: list[str] = []


class AccountSeriesResponse(BaseModel):
    """Per-account breakdown aligned with the parent ``dates``."""

    account_id: str
    account_name: str
    currency: str
    native_values: list[float]
    values: list[float]
    visible: bool = False


class NetWorthResponse(BaseModel):
    """Columnar net-worth series in the display currency."""

    currency: str
    start: Optional[str] = None
    end: Optional[str] = None
    dates: list[str] = []
    totals: list[float] = []
    current_total: float = 0.0
    accounts: list[AccountSeriesResponse] = []
    quality: DataQualityResponse = DataQualityResponse()


class AllocationItemResponse(BaseModel):
    """Response schema for a single allocation item."""

    label: str
    value: float
    percentage: float


class AllocationResponse(BaseModel):
    """Response schema for the asset-type breakdown."""

    currency: str
    items: list[AllocationItemResponse] = []
    total_value: float = 0.0


class CategoryTotalResponse(BaseModel):
    category: str
    amount: float


class ExpensesResponse(BaseModel):
    currency: str
    empty: bool = True
    categories: list[CategoryTotalResponse] = []


class IncomeExpenseBucketResponse(BaseModel):
    start: str
    label: str
    income: float
    expense: float


class IncomeExpensesResponse(BaseModel):
    currency: str
    granularity: Optional[str] = None
    buckets: list[IncomeExpenseBucketResponse] = []


class FlowNodeResponse(BaseModel):
    id: str
    label: str
    kind: str
    priority: int


class FlowEdgeResponse(BaseModel):
    source: str
    target: str
    amount: float
    priority: int


class CashFlowResponse(BaseModel):
    """Sankey-style cash-flow graph."""

    currency: str
    empty: bool = True
    total_income: float = 0.0
    total_expense: float = 0.0
    nodes: list[FlowNodeResponse] = []
    edges: list[FlowEdgeResponse] = []
