"""Pydantic schemas for API responses."""

from networth.api.schemas.dashboard import (
    DataQualityResponse,
    AccountSeriesResponse,
    NetWorthResponse,
    AllocationItemResponse,
    AllocationResponse,
    CategoryTotalResponse,
    ExpensesResponse,
    IncomeExpenseBucketResponse,
    IncomeExpensesResponse,
    FlowNodeResponse,
    FlowEdgeResponse,
    CashFlowResponse,
)
from networth.api.schemas.investments import (
    HoldingResponse,
    HoldingsResponse,
    TreemapRectResponse,
    TreemapResponse,
)

__all__ = [
    "DataQualityResponse",
    "AccountSeriesResponse",
    "NetWorthResponse",
    "AllocationItemResponse",
    "AllocationResponse",
    "CategoryTotalResponse",
    "ExpensesResponse",
    "IncomeExpenseBucketResponse",
    "IncomeExpensesResponse",
    "FlowNodeResponse",
    "FlowEdgeResponse",
    "CashFlowResponse",
    "HoldingResponse",
    "HoldingsResponse",
    "TreemapRectResponse",
    "TreemapResponse",
]
