"""API routers package."""

from networth.api.routers.dashboard import router as dashboard_router
from networth.api.routers.investments import router as investments_router

__all__ = [
    "dashboard_router",
    "investments_router",
]
