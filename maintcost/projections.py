"""
Near-term cost projections.

These are moving-average extrapolations, not forecasts: the next month is
assumed to cost the mean of the last three monthly buckets, and the year-end
figure simply scales the monthly average. No trend or seasonality is fitted.
"""

from typing import Sequence

from .breakdown import MonthlyBreakdown, Projections

PROJECTION_WINDOW = 3


def estimate_projections(
    monthly: Sequence[MonthlyBreakdown], monthly_average: float
) -> Projections:
    recent = list(monthly)[-PROJECTION_WINDOW:]
    recent_average = sum(m.total for m in recent) / len(recent) if recent else 0.0
    return Projections(
        next_month_estimate=recent_average,
        next_quarter_estimate=recent_average * 3,
        year_end_estimate=monthly_average * 12,
    )
