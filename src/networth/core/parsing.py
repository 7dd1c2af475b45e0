"""Lenient field parsing used at the data boundary."""

import math
from typing import Any, Optional


def parse_number(value: Any) -> float:
    """
    Parse a numeric ledger field.

    Non-numeric, missing, NaN and infinite values all parse to 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def normalize_symbol(s: Optional[str]) -> Optional[str]:
    """Normalize symbol: strip whitespace and uppercase; None or empty -> None."""
    if s is None:
        return None
    stripped = str(s).strip().upper()
    return stripped if stripped else None


def normalize_text(s: Optional[str]) -> Optional[str]:
    """Strip a free-text field; None or empty -> None."""
    if s is None:
        return None
    stripped = str(s).strip()
    return stripped if stripped else None
