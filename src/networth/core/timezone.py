"""Calendar and timezone utilities.

All ledger dates are plain calendar days (ISO ``YYYY-MM-DD``). The only place a
timezone matters is deciding which day is "today".
"""

from datetime import date, datetime
from typing import Optional, Union

import pytz
from dateutil import parser as date_parser

from networth.core.exceptions import ValidationError

EASTERN_TZ = pytz.timezone("US/Eastern")

_DATE_FORMAT_TOKENS = (
    ("YYYY", "%Y"),
    ("MM", "%m"),
    ("DD", "%d"),
)


def now_in(tz_name: Optional[str] = None) -> datetime:
    """Return the current time in the given timezone (US/Eastern by default)."""
    tz = pytz.timezone(tz_name) if tz_name else EASTERN_TZ
    return datetime.now(tz)


def today_in(tz_name: Optional[str] = None) -> date:
    """Return today's calendar date in the given timezone."""
    return now_in(tz_name).date()


def parse_iso_date(value: Union[str, date, datetime, None]) -> date:
    """
    Parse a ledger date into a calendar day.

    Accepts date/datetime objects and strings such as ``2024-06-01`` or
    ``2024-06-01T10:30:00Z``. Raises ValidationError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not str(value).strip():
        raise ValidationError("Date is required")
    try:
        return date_parser.isoparse(str(value).strip()).date()
    except (ValueError, OverflowError):
        raise ValidationError(f"Invalid date: {value!r}")


def format_date(value: date, pattern: str = "YYYY-MM-DD") -> str:
    """Format a day using a ``YYYY``/``MM``/``DD`` token pattern (e.g. ``DD/MM/YYYY``)."""
    strftime_pattern = pattern
    for token, directive in _DATE_FORMAT_TOKENS:
        strftime_pattern = strftime_pattern.replace(token, directive)
    return value.strftime(strftime_pattern)


def format_month(value: date, include_year: bool = False) -> str:
    """Short month label for monthly buckets ("Jan" or "Jan 2024")."""
    return value.strftime("%b %Y" if include_year else "%b")
