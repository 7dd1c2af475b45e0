"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from networth.config.settings import get_settings
from networth.config.logging_config import setup_logging
from networth.repositories.sqlalchemy.database import init_db
from networth.api.routers import dashboard_router, investments_router
from networth.core.exceptions import AppError, NotFoundError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    logger.info(
        "%s %s started (display currency %s, provider %s)",
        settings.app_name, settings.app_version,
        settings.display_currency, settings.market_data_provider,
    )
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Point-in-time net worth valuation and analytics",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(dashboard_router)
app.include_router(investments_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
