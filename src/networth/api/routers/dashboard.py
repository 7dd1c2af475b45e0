"""Dashboard endpoints: net worth, allocation, expenses, income vs expenses, cash flow."""

from fastapi import APIRouter, Depends

from networth.api.deps import get_dashboard_params, get_dashboard_service
from networth.api.schemas import (
    AccountSeriesResponse,
    AllocationItemResponse,
    AllocationResponse,
    CashFlowResponse,
    CategoryTotalResponse,
    DataQualityResponse,
    ExpensesResponse,
    FlowEdgeResponse,
    FlowNodeResponse,
    IncomeExpenseBucketResponse,
    IncomeExpensesResponse,
    NetWorthResponse,
)
from networth.config.settings import get_settings
from networth.core.timezone import format_date
from networth.services import DashboardParams, DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _fmt(day) -> str:
    return format_date(day, get_settings().date_format)


@router.get("/net-worth", response_model=NetWorthResponse)
async def get_net_worth(
    params: DashboardParams = Depends(get_dashboard_params),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> NetWorthResponse:
    """Daily net worth over the selected range; the last point is the live total."""
    views = await dashboard.refresh(params)
    if views is None:
        return NetWorthResponse(currency=params.display_currency)

    series = views.net_worth
    return NetWorthResponse(
        currency=series.currency,
        start=_fmt(views.date_range.start),
        end=_fmt(views.date_range.end),
        dates=[_fmt(s.date) for s in series.snapshots],
        totals=[s.total for s in series.snapshots],
        current_total=views.current_net_worth,
        accounts=[
            AccountSeriesResponse(
                account_id=a.account_id,
                account_name=a.account_name,
                currency=a.currency,
                native_values=list(a.native_values),
                values=list(a.values),
                visible=a.visible,
            )
            for a in series.accounts
        ],
        quality=DataQualityResponse(
            missing_prices=series.quality.missing_prices,
            fx_fallbacks=series.quality.fx_fallbacks,
            oversold_tickers=list(series.quality.oversold_tickers),
        ),
    )


@router.get("/allocation", response_model=AllocationResponse)
async def get_allocation(
    params: DashboardParams = Depends(get_dashboard_params),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> AllocationResponse:
    """Net worth broken down by asset type."""
    views = await dashboard.refresh(params)
    if views is None:
        return AllocationResponse(currency=params.display_currency)

    allocation = views.allocation
    return AllocationResponse(
        currency=allocation.currency,
        items=[
            AllocationItemResponse(label=i.label, value=i.value, percentage=i.percentage)
            for i in allocation.items
        ],
        total_value=allocation.total_value,
    )


@router.get("/expenses", response_model=ExpensesResponse)
async def get_expenses(
    params: DashboardParams = Depends(get_dashboard_params),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> ExpensesResponse:
    """Spending by category over the selected range, largest first."""
    views = await dashboard.refresh(params)
    if views is None:
        return ExpensesResponse(currency=params.display_currency)

    return ExpensesResponse(
        currency=params.display_currency,
        empty=not views.expenses_by_category,
        categories=[
            CategoryTotalResponse(category=c.category, amount=c.amount)
            for c in views.expenses_by_category
        ],
    )


@router.get("/income-expenses", response_model=IncomeExpensesResponse)
async def get_income_expenses(
    params: DashboardParams = Depends(get_dashboard_params),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> IncomeExpensesResponse:
    """Income and expenses per day or per month."""
    views = await dashboard.refresh(params)
    if views is None:
        return IncomeExpensesResponse(currency=params.display_currency)

    series = views.income_vs_expenses
    return IncomeExpensesResponse(
        currency=params.display_currency,
        granularity=series.granularity.value,
        buckets=[
            IncomeExpenseBucketResponse(
                start=_fmt(b.start),
                label=b.label,
                income=b.income,
                expense=b.expense,
            )
            for b in series.buckets
        ],
    )


@router.get("/cash-flow", response_model=CashFlowResponse)
async def get_cash_flow(
    params: DashboardParams = Depends(get_dashboard_params),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> CashFlowResponse:
    """Sankey-style flow from income through the budget to savings and expenses."""
    views = await dashboard.refresh(params)
    if views is None:
        return CashFlowResponse(currency=params.display_currency)

    graph = views.cash_flow
    return CashFlowResponse(
        currency=params.display_currency,
        empty=graph.is_empty,
        total_income=graph.total_income,
        total_expense=graph.total_expense,
        nodes=[
            FlowNodeResponse(id=n.id, label=n.label, kind=n.kind.value, priority=n.priority)
            for n in graph.nodes
        ],
        edges=[
            FlowEdgeResponse(
                source=e.from_node, target=e.to_node, amount=e.amount, priority=e.priority
            )
            for e in graph.edges
        ],
    )
