"""
Date and Time Range Utilities

Resolves named relative ranges ("last 30 days") to absolute windows and
builds the calendar-day axis used by trend and heatmap views.

Every function takes its reference timestamp explicitly; nothing here
reads the system clock.
"""

import calendar
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import List, Tuple, Union

from ruralhealth.errors import UnknownTimeRangeError

# "all" is not truly unbounded, it looks back this many years
ALL_TIME_LOOKBACK_YEARS = 10

DateLike = Union[date, datetime]


class TimeRange(str, Enum):
    """Named relative time ranges."""
    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"
    LAST_90_DAYS = "90days"
    LAST_6_MONTHS = "6months"
    LAST_YEAR = "1year"
    ALL = "all"


def parse_time_range(value: Union[str, TimeRange]) -> TimeRange:
    """Coerce a range name to `TimeRange`, failing on unknown names."""
    if isinstance(value, TimeRange):
        return value
    try:
        return TimeRange(value)
    except ValueError:
        valid = ", ".join(r.value for r in TimeRange)
        raise UnknownTimeRangeError(f"Unknown time range: {value!r} (expected one of {valid})") from None


def _subtract_months(moment: datetime, months: int) -> datetime:
    """Step back whole calendar months, clamping the day to the target month."""
    total = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def get_start_date_from_range(end_date: datetime, time_range: Union[str, TimeRange]) -> datetime:
    """
    Get the start of the inclusive window `[start, end_date]` for a range.

    Args:
        end_date: Reference "now"
        time_range: Range name

    Returns:
        Start of the window, with the same time of day as `end_date`
    """
    time_range = parse_time_range(time_range)

    if time_range == TimeRange.LAST_7_DAYS:
        return end_date - timedelta(days=7)
    if time_range == TimeRange.LAST_30_DAYS:
        return end_date - timedelta(days=30)
    if time_range == TimeRange.LAST_90_DAYS:
        return end_date - timedelta(days=90)
    if time_range == TimeRange.LAST_6_MONTHS:
        return _subtract_months(end_date, 6)
    if time_range == TimeRange.LAST_YEAR:
        return _subtract_months(end_date, 12)
    return _subtract_months(end_date, 12 * ALL_TIME_LOOKBACK_YEARS)


def resolve_time_range(now: datetime, time_range: Union[str, TimeRange]) -> Tuple[datetime, datetime]:
    """Resolve a range name to the `(start, end)` window ending at `now`."""
    return get_start_date_from_range(now, time_range), now


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def generate_date_labels(start_date: DateLike, end_date: DateLike) -> List[str]:
    """
    One ISO `YYYY-MM-DD` label per day from `start_date` to `end_date`.

    Steps by exactly one day from `start_date`, producing
    floor((end - start) / 1 day) + 1 labels, or none when end < start.
    """
    start = _as_datetime(start_date)
    end = _as_datetime(end_date)
    if end < start:
        return []

    count = (end - start) // timedelta(days=1) + 1
    return [(start + timedelta(days=i)).date().isoformat() for i in range(count)]


def day_key(moment: DateLike) -> str:
    """Calendar-day key (`YYYY-MM-DD`) of a timestamp."""
    if isinstance(moment, datetime):
        return moment.date().isoformat()
    return moment.isoformat()


def month_key(moment: DateLike) -> str:
    """Zero-padded `YYYY-MM` key of a timestamp."""
    return f"{moment.year:04d}-{moment.month:02d}"


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the epoch; naive timestamps are read as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    delta = moment - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return delta // timedelta(milliseconds=1)
