"""Cost totals, shares, averages, efficiency ratios and top expenses."""

from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from .breakdown import (
    Averages,
    CategoryBreakdown,
    CostTotals,
    MonthlyBreakdown,
    TopExpense,
)
from .calculations import days_since, parse_number
from .event import MaintenanceEvent
from .records import ServiceRecord
from .status import Category, EventType

# Assumed ownership span when no record carries a usable date
DEFAULT_DAYS_WITHOUT_HISTORY = 365
DEFAULT_TOP_EXPENSES = 5


def total_costs(events: Iterable[MaintenanceEvent]) -> CostTotals:
    """Sum costs per category over every event, dated or not."""
    totals = CostTotals()
    for event in events:
        if event.cost is None:
            continue
        category = event.category
        setattr(totals, category.value, totals.get(category) + event.cost)
    totals.all = totals.service + totals.registration + totals.insurance + totals.issues
    return totals


def category_breakdown(totals: CostTotals) -> List[CategoryBreakdown]:
    """Share of each non-zero category in the overall total."""
    denominator = totals.all or 1
    breakdown = []
    for category in Category:
        value = totals.get(category)
        if value == 0:
            continue
        breakdown.append(
            CategoryBreakdown(
                name=category.label,
                value=value,
                percentage=value / denominator * 100,
                color=category.color,
            )
        )
    return breakdown


def _average_cost(events: Sequence[MaintenanceEvent], event_type: EventType) -> float:
    matching = [e for e in events if e.type == event_type]
    spent = sum(e.cost for e in matching if e.cost is not None)
    return spent / max(1, len(matching))


def compute_averages(
    totals: CostTotals,
    monthly: Sequence[MonthlyBreakdown],
    events: Sequence[MaintenanceEvent],
) -> Averages:
    """
    Average costs.

    - monthly: all-time total over the number of active months in the window
    - service/issue: category sum over that category's event count
    """
    active_months = sum(1 for m in monthly if m.total != 0)
    return Averages(
        monthly_average=totals.all / max(1, active_months),
        service_average=_average_cost(events, EventType.SERVICE),
        issue_average=_average_cost(events, EventType.ISSUE),
    )


def latest_odometer(services: Iterable[ServiceRecord]) -> Optional[float]:
    """Highest recorded service mileage, or None without readings."""
    readings = [parse_number(s.mileage) for s in services]
    readings = [r for r in readings if r is not None]
    if not readings:
        return None
    return max(readings)


def cost_per_km(totals: CostTotals, services: Iterable[ServiceRecord]) -> Optional[float]:
    """Overall cost per odometer kilometre; None when there is no positive reading."""
    odometer = latest_odometer(services)
    if not odometer:
        return None
    return totals.all / odometer


def cost_per_day(
    totals: CostTotals, events: Iterable[MaintenanceEvent], now: datetime
) -> float:
    """Overall cost per day since the oldest dated event (at least one day)."""
    dates = [e.date for e in events if e.is_dated]
    if dates:
        days = max(1, days_since(min(dates), now))
    else:
        days = DEFAULT_DAYS_WITHOUT_HISTORY
    return totals.all / days


def top_expenses(
    events: Iterable[MaintenanceEvent], limit: int = DEFAULT_TOP_EXPENSES
) -> List[TopExpense]:
    """
    The most expensive events, highest first.

    Equal amounts keep their input order (sorted() is stable with reverse).
    """
    if limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")
    expenses = [
        TopExpense(
            id=e.id,
            type=e.type.value,
            date=e.date,
            description=f"{e.title}: {e.description}",
            amount=e.cost,
        )
        for e in events
        if e.cost is not None
    ]
    expenses = sorted(expenses, key=lambda x: x.amount, reverse=True)
    return expenses[:limit]
