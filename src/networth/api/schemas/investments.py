"""Pydantic schemas for investment endpoints."""

from typing import Optional

from pydantic import BaseModel


class HoldingResponse(BaseModel):
    """Response schema for a single current holding."""

    ticker: str
    shares: float
    cost_basis: float
    price: float
    value: float
    roi: float
    change_percent: float = 0.0
    quote_type: Optional[str] = None


class HoldingsResponse(BaseModel):
    holdings: list[HoldingResponse] = []
    total_value: float = 0.0
    total_cost_basis: float = 0.0


class TreemapRectResponse(BaseModel):
    ticker: str
    x: float
    y: float
    w: float
    h: float
    value: float
    roi: float
    color: str


class TreemapResponse(BaseModel):
    width: float
    height: float
    rects: list[TreemapRectResponse] = []
