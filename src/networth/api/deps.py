"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Query

from networth.app_context import get_app_context
from networth.config.settings import get_settings
from networth.core.timezone import parse_iso_date
from networth.services import DashboardParams, DashboardService
from networth.services.date_range import parse_time_range


def get_dashboard_service() -> DashboardService:
    """Provide the shared DashboardService instance."""
    return get_app_context().dashboard


def get_dashboard_params(
    time_range: Optional[str] = Query(None, description="1M, 3M, 6M, YTD, 1Y, ALL or CUSTOM"),
    start: Optional[str] = Query(None, description="ISO start date (CUSTOM only)"),
    end: Optional[str] = Query(None, description="ISO end date (CUSTOM only)"),
    currency: Optional[str] = Query(None, description="Display currency (default from settings)"),
    visible: Optional[str] = Query(None, description="Comma-separated account IDs to show in the breakdown"),
) -> DashboardParams:
    """Build DashboardParams from query parameters; bad values raise ValidationError."""
    settings = get_settings()
    return DashboardParams(
        time_range=parse_time_range(time_range, default=settings.default_time_range),
        custom_start=parse_iso_date(start) if start else None,
        custom_end=parse_iso_date(end) if end else None,
        display_currency=currency or settings.display_currency,
        visible_account_ids=tuple(v.strip() for v in visible.split(",") if v.strip()) if visible else (),
    )
