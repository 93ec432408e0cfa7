"""
Vehicle maintenance cost analytics and event timeline engine.

This package turns a vehicle's four record streams into read-models:
- Records: ServiceRecord, RegistrationRecord, InsuranceRecord, IssueReport
- MaintenanceEvent: the common event shape, with derived status/urgency
- CostAnalytics: totals, monthly buckets, shares, trends, projections
- TimelineGroup: filtered and grouped events for presentation
- MaintenanceAlert: service, expiry and open-issue items needing attention
- VehicleRecords: aggregate tying a vehicle's records together
"""

from .status import Category, EventStatus, EventType, Urgency
from .car import Car
from .records import InsuranceRecord, IssueReport, RegistrationRecord, ServiceRecord
from .event import MaintenanceEvent
from .breakdown import (
    Averages,
    CategoryBreakdown,
    CostAnalytics,
    CostComparison,
    CostReport,
    CostTotals,
    MonthlyBreakdown,
    Projections,
    TopExpense,
    YearlyTrend,
)
from .calculations import days_until, parse_cost, parse_date
from .classifier import classify_event
from .normalizer import normalize_records
from .bucketer import build_monthly_buckets, build_yearly_trends
from .aggregator import (
    category_breakdown,
    compute_averages,
    cost_per_day,
    cost_per_km,
    top_expenses,
    total_costs,
)
from .projections import estimate_projections
from .comparator import compare_periods
from .timeline import TimelineGroup, build_timeline, filter_events, group_events
from .report import build_cost_analytics, build_report
from .alerts import MaintenanceAlert, alert_counts, build_alerts, needs_attention
from .vehicle import VehicleRecords
from .loader import load_vehicle_records, records_from_dict
from .export import analytics_to_csv, timeline_to_csv

__all__ = [
    "Category",
    "EventStatus",
    "EventType",
    "Urgency",
    "Car",
    "ServiceRecord",
    "RegistrationRecord",
    "InsuranceRecord",
    "IssueReport",
    "MaintenanceEvent",
    "Averages",
    "CategoryBreakdown",
    "CostAnalytics",
    "CostComparison",
    "CostReport",
    "CostTotals",
    "MonthlyBreakdown",
    "Projections",
    "TopExpense",
    "YearlyTrend",
    "days_until",
    "parse_cost",
    "parse_date",
    "classify_event",
    "normalize_records",
    "build_monthly_buckets",
    "build_yearly_trends",
    "category_breakdown",
    "compute_averages",
    "cost_per_day",
    "cost_per_km",
    "top_expenses",
    "total_costs",
    "estimate_projections",
    "compare_periods",
    "TimelineGroup",
    "build_timeline",
    "filter_events",
    "group_events",
    "build_cost_analytics",
    "build_report",
    "MaintenanceAlert",
    "alert_counts",
    "build_alerts",
    "needs_attention",
    "VehicleRecords",
    "load_vehicle_records",
    "records_from_dict",
    "analytics_to_csv",
    "timeline_to_csv",
]
