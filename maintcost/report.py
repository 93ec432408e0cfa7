"""Assemble the cost analytics report from the four record streams."""

import logging
from datetime import datetime
from typing import List, Sequence

from .aggregator import (
    DEFAULT_TOP_EXPENSES,
    category_breakdown,
    compute_averages,
    cost_per_day,
    cost_per_km,
    top_expenses,
    total_costs,
)
from .breakdown import CostAnalytics, CostReport
from .bucketer import build_monthly_buckets, build_yearly_trends
from .calculations import as_datetime
from .comparator import compare_periods
from .event import MaintenanceEvent
from .normalizer import normalize_records
from .projections import estimate_projections
from .records import InsuranceRecord, IssueReport, RegistrationRecord, ServiceRecord

logger = logging.getLogger(__name__)


def analytics_from_events(
    events: List[MaintenanceEvent],
    services: Sequence[ServiceRecord],
    now: datetime,
) -> CostAnalytics:
    """Build the report from already normalized events."""
    monthly = build_monthly_buckets(events, now)
    totals = total_costs(events)
    averages = compute_averages(totals, monthly, events)

    analytics = CostAnalytics(
        total_costs=totals,
        monthly_costs=monthly,
        category_breakdown=category_breakdown(totals),
        yearly_trends=build_yearly_trends(monthly),
        averages=averages,
        projections=estimate_projections(monthly, averages.monthly_average),
        cost_per_km=cost_per_km(totals, services),
        cost_per_day=cost_per_day(totals, events, now),
    )
    logger.info(
        "Cost analytics built from %d events as of %s: total %.2f",
        len(events),
        now.date().isoformat(),
        totals.all,
    )
    return analytics


def build_cost_analytics(
    services: Sequence[ServiceRecord],
    registrations: Sequence[RegistrationRecord],
    insurances: Sequence[InsuranceRecord],
    issues: Sequence[IssueReport],
    now: datetime,
) -> CostAnalytics:
    """
    Build the CostAnalytics report for one vehicle at the instant now.

    Pipeline: normalize -> monthly buckets -> totals, shares, averages,
    ratios -> projections. Pure: equal inputs and equal now give equal output.
    """
    now = as_datetime(now)
    events = normalize_records(services, registrations, insurances, issues, now)
    return analytics_from_events(events, services, now)


def build_report(
    services: Sequence[ServiceRecord],
    registrations: Sequence[RegistrationRecord],
    insurances: Sequence[InsuranceRecord],
    issues: Sequence[IssueReport],
    now: datetime,
    period: str = "month",
    top: int = DEFAULT_TOP_EXPENSES,
) -> CostReport:
    """Analytics plus period comparison and top expenses."""
    now = as_datetime(now)
    events = normalize_records(services, registrations, insurances, issues, now)
    analytics = analytics_from_events(events, services, now)
    return CostReport(
        analytics=analytics,
        comparison=compare_periods(analytics.monthly_costs, period),
        top_expenses=top_expenses(events, top),
    )
