"""Group event costs into calendar month and year buckets."""

from datetime import datetime
from typing import Dict, Iterable, List, Tuple

from .breakdown import MONTH_LABELS, MonthlyBreakdown, YearlyTrend
from .calculations import trailing_months
from .event import MaintenanceEvent

MONTHS_IN_WINDOW = 12


def empty_buckets(now: datetime, count: int = MONTHS_IN_WINDOW) -> List[MonthlyBreakdown]:
    """Zero-valued buckets for the trailing window, oldest first."""
    return [
        MonthlyBreakdown(month=MONTH_LABELS[month - 1], year=year, month_number=month)
        for year, month in trailing_months(now, count)
    ]


def build_monthly_buckets(
    events: Iterable[MaintenanceEvent], now: datetime
) -> List[MonthlyBreakdown]:
    """
    Sum event costs into the trailing 12 calendar months (current included).

    Undated events, events without cost and events outside the window are
    skipped here; they still count towards all-time totals.
    """
    buckets = empty_buckets(now)
    by_month: Dict[Tuple[int, int], MonthlyBreakdown] = {
        (b.year, b.month_number): b for b in buckets
    }
    for event in events:
        if not event.is_dated or event.cost is None:
            continue
        bucket = by_month.get((event.date.year, event.date.month))
        if bucket is not None:
            bucket.add(event.category, event.cost)
    return buckets


def build_yearly_trends(monthly: Iterable[MonthlyBreakdown]) -> List[YearlyTrend]:
    """
    Fold monthly buckets into one trend per calendar year, ascending.

    average_monthly always divides by 12, even for partial years.
    """
    by_year: Dict[int, YearlyTrend] = {}
    for month in monthly:
        trend = by_year.setdefault(month.year, YearlyTrend(year=month.year))
        trend.total += month.total
        trend.service += month.service
        trend.registration += month.registration
        trend.insurance += month.insurance
        trend.issues += month.issues

    trends = sorted(by_year.values(), key=lambda t: t.year)
    for trend in trends:
        trend.average_monthly = trend.total / 12
    return trends
