"""Investment endpoints: current holdings and treemap layout."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from networth.api.deps import get_dashboard_params, get_dashboard_service
from networth.api.schemas import (
    HoldingResponse,
    HoldingsResponse,
    TreemapRectResponse,
    TreemapResponse,
)
from networth.config.settings import get_settings
from networth.core.exceptions import NotFoundError
from networth.domain.views import Holding
from networth.services import (
    AnalysisService,
    DashboardParams,
    DashboardService,
    DashboardViews,
    PositionEngine,
)

router = APIRouter(prefix="/investments", tags=["investments"])


def _account_holdings(views: DashboardViews, account_id: str) -> list[Holding]:
    snapshot = views.snapshot
    if snapshot is None or account_id not in {a.id for a in snapshot.accounts}:
        raise NotFoundError("Account", account_id)
    analysis = AnalysisService(PositionEngine(get_settings().holding_tolerance))
    return analysis.holdings(list(snapshot.transactions), snapshot.quotes, account_id=account_id)


@router.get("/holdings", response_model=HoldingsResponse)
async def get_holdings(
    account_id: Optional[str] = Query(None, description="Only holdings of this account"),
    params: DashboardParams = Depends(get_dashboard_params),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> HoldingsResponse:
    """Current holdings priced at live quotes, largest first."""
    views = await dashboard.refresh(params)
    if views is None:
        if account_id:
            raise HTTPException(status_code=404, detail=f"Account not found: {account_id}")
        return HoldingsResponse()

    holdings = list(views.holdings)
    if account_id:
        try:
            holdings = _account_holdings(views, account_id)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=e.message)

    return HoldingsResponse(
        holdings=[
            HoldingResponse(
                ticker=h.ticker,
                shares=h.shares,
                cost_basis=h.cost_basis,
                price=h.price,
                value=h.value,
                roi=h.roi,
                change_percent=h.change_percent,
                quote_type=h.quote_type,
            )
            for h in holdings
        ],
        total_value=sum(h.value for h in holdings),
        total_cost_basis=sum(h.cost_basis for h in holdings),
    )


@router.get("/treemap", response_model=TreemapResponse)
async def get_treemap(
    width: float = Query(100.0, gt=0, description="Root rectangle width"),
    height: float = Query(100.0, gt=0, description="Root rectangle height"),
    params: DashboardParams = Depends(get_dashboard_params),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> TreemapResponse:
    """Holdings laid out as a treemap, area proportional to value, colored by ROI."""
    views = await dashboard.refresh(params)
    if views is None:
        return TreemapResponse(width=width, height=height)

    rects = AnalysisService().treemap(list(views.holdings), width, height)
    return TreemapResponse(
        width=width,
        height=height,
        rects=[
            TreemapRectResponse(
                ticker=r.ticker, x=r.x, y=r.y, w=r.w, h=r.h,
                value=r.value, roi=r.roi, color=r.color,
            )
            for r in rects
        ],
    )
