"""Helper functions for date and cost arithmetic."""

import math
from datetime import date, datetime, timezone
from typing import Any, List, Optional, Tuple

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

SECONDS_PER_DAY = 24 * 60 * 60


def to_naive(moment: datetime) -> datetime:
    """Drop timezone info, converting aware values to UTC first."""
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def as_datetime(value: Any) -> datetime:
    """
    Coerce "now" into a naive datetime.

    Accepts a datetime or a date (midnight). Anything else is a programming
    error and raises TypeError.
    """
    if isinstance(value, datetime):
        return to_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise TypeError(f"Expected a date or datetime, got {type(value).__name__}")


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a record date into a naive datetime.

    Returns None for empty or unparseable values instead of raising, so one
    bad record never aborts a batch.
    """
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return as_datetime(value)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return to_naive(isoparse(value.strip()))
    except (ValueError, OverflowError):
        return None


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a non-negative amount (cost, price, odometer reading).

    - Numbers and numeric strings are accepted
    - None, booleans, non-numeric text, NaN/infinity and negatives give None
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount < 0:
        return None
    return amount


def parse_cost(value: Any) -> Optional[float]:
    """Parse a cost amount; see parse_number."""
    return parse_number(value)


def days_until(target: datetime, now: datetime) -> int:
    """Whole days from now until target, rounded up (negative when past)."""
    return math.ceil((target - now).total_seconds() / SECONDS_PER_DAY)


def days_since(start: datetime, now: datetime) -> int:
    """Whole days elapsed from start until now, rounded down."""
    return math.floor((now - start).total_seconds() / SECONDS_PER_DAY)


def month_start(moment: datetime) -> datetime:
    """First instant of the calendar month containing moment."""
    return datetime(moment.year, moment.month, 1)


def trailing_months(now: datetime, count: int = 12) -> List[Tuple[int, int]]:
    """
    (year, month) pairs for the trailing window ending with now's month.

    Oldest first, current month last.
    """
    current = month_start(now)
    months = []
    for offset in range(count - 1, -1, -1):
        moment = current - relativedelta(months=offset)
        months.append((moment.year, moment.month))
    return months
