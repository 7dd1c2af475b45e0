"""Core utilities and shared functionality."""

from networth.core.timezone import (
    now_in,
    today_in,
    parse_iso_date,
    format_date,
    format_month,
    EASTERN_TZ,
)
from networth.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    BackendError,
)
from networth.core.parsing import parse_number, normalize_symbol, normalize_text

__all__ = [
    "now_in",
    "today_in",
    "parse_iso_date",
    "format_date",
    "format_month",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "BackendError",
    "parse_number",
    "normalize_symbol",
    "normalize_text",
]
