"""Period-over-period comparison of monthly cost buckets."""

from typing import Sequence

from .breakdown import CostComparison, MonthlyBreakdown

PERIOD_MONTHS = {
    "month": 1,
    "quarter": 3,
    "year": 12,
}


def compare_periods(monthly: Sequence[MonthlyBreakdown], period: str = "month") -> CostComparison:
    """
    Compare the most recent period with the one before it.

    With 12 buckets a "year" comparison has no previous period, so previous
    is 0. change_percentage is 0 whenever previous is 0.
    """
    if period not in PERIOD_MONTHS:
        raise ValueError(
            f"Unknown period '{period}' (expected one of {', '.join(PERIOD_MONTHS)})"
        )
    months = PERIOD_MONTHS[period]
    totals = [m.total for m in monthly]

    current = float(sum(totals[-months:]))
    previous = float(sum(totals[-months * 2:-months]))
    change = current - previous
    change_percentage = change / previous * 100 if previous > 0 else 0.0

    return CostComparison(
        period=period,
        current=current,
        previous=previous,
        change=change,
        change_percentage=change_percentage,
    )
