"""Date-range selector for time-indexed views."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Optional, Union

from dateutil.relativedelta import relativedelta

from networth.core.exceptions import ValidationError
from networth.domain.models import BucketGranularity, TimeRange

# Ranges spanning at most this many days are bucketed by day
DAILY_BUCKET_MAX_DAYS = 31

_MONTHS_BACK = {
    TimeRange.ONE_MONTH: 1,
    TimeRange.THREE_MONTHS: 3,
    TimeRange.SIX_MONTHS: 6,
    TimeRange.ONE_YEAR: 12,
}


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-day range."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end

    def iter_days(self) -> Iterator[date]:
        d = self.start
        while d <= self.end:
            yield d
            d += timedelta(days=1)


def parse_time_range(value: Union[str, TimeRange, None], default: str = "1Y") -> TimeRange:
    """Parse a selector such as ``"3M"`` or ``"ytd"``."""
    if isinstance(value, TimeRange):
        return value
    raw = (value or default).strip().upper()
    try:
        return TimeRange(raw)
    except ValueError:
        allowed = ", ".join(t.value for t in TimeRange)
        raise ValidationError(f"Invalid time range: {value!r} (expected one of {allowed})")


def resolve_date_range(
    time_range: Union[str, TimeRange],
    today: date,
    first_transaction_date: Optional[date] = None,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
    clamp_to_first_transaction: bool = True,
) -> DateRange:
    """
    Resolve a selector into a concrete range ending today.

    Month-based selectors use calendar-month arithmetic. ``ALL`` starts at the first
    transaction (one year back when there are none). For every selector except
    ``CUSTOM`` the start is clamped up to the first transaction date when
    ``clamp_to_first_transaction`` is set.
    """
    selector = parse_time_range(time_range)

    if selector == TimeRange.CUSTOM:
        if custom_start is None or custom_end is None:
            raise ValidationError("Custom range requires both start and end dates")
        if custom_start > custom_end:
            raise ValidationError(
                f"Custom range start {custom_start.isoformat()} is after end {custom_end.isoformat()}"
            )
        return DateRange(custom_start, custom_end)

    if selector == TimeRange.YEAR_TO_DATE:
        start = date(today.year, 1, 1)
    elif selector == TimeRange.ALL:
        start = first_transaction_date or (today - relativedelta(years=1))
    else:
        start = today - relativedelta(months=_MONTHS_BACK[selector])

    if (
        clamp_to_first_transaction
        and first_transaction_date is not None
        and first_transaction_date > start
    ):
        start = first_transaction_date
    # Transactions dated in the future leave nothing to show before today
    if start > today:
        start = today
    return DateRange(start, today)


def bucket_granularity(date_range: DateRange) -> BucketGranularity:
    """Day buckets for ranges up to a month long, month buckets otherwise."""
    if (date_range.end - date_range.start).days <= DAILY_BUCKET_MAX_DAYS:
        return BucketGranularity.DAY
    return BucketGranularity.MONTH
