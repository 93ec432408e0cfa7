"""
CSV flattening of analytics reports and timelines.

Column order and number formats are fixed: money uses 2 decimals and cost
per km uses 3.
"""

import csv
import io
from datetime import date
from typing import Iterable, List, Optional

from .breakdown import CostAnalytics
from .car import Car
from .event import MaintenanceEvent

MONTHLY_HEADER = ["Month", "Year", "Service", "Registration", "Insurance", "Issues", "Total"]
TIMELINE_HEADER = ["Date", "Type", "Title", "Description", "Status", "Urgency", "Cost"]


def format_money(amount: Optional[float]) -> str:
    return f"{amount or 0:.2f}"


def format_per_km(amount: Optional[float]) -> str:
    return f"{amount or 0:.3f}"


def _header_rows(title: str, car: Optional[Car], report_date: Optional[date]) -> List[List[str]]:
    rows = [[f"{title} - {car.name}" if car else title]]
    if car and car.license_plate:
        rows.append([f"License plate: {car.license_plate}"])
    if report_date:
        rows.append([f"Report date: {report_date.isoformat()}"])
    rows.append([])
    return rows


def _write(rows: Iterable[List[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def analytics_rows(analytics: CostAnalytics) -> List[List[str]]:
    """Totals, monthly and averages sections as rows."""
    totals = analytics.total_costs
    rows = [
        ["TOTAL COSTS"],
        ["Category", "Amount"],
        ["Service", format_money(totals.service)],
        ["Registration", format_money(totals.registration)],
        ["Insurance", format_money(totals.insurance)],
        ["Issues", format_money(totals.issues)],
        ["TOTAL", format_money(totals.all)],
        [],
        ["MONTHLY COSTS"],
        MONTHLY_HEADER,
    ]
    for month in analytics.monthly_costs:
        rows.append(
            [
                month.month,
                str(month.year),
                format_money(month.service),
                format_money(month.registration),
                format_money(month.insurance),
                format_money(month.issues),
                format_money(month.total),
            ]
        )
    rows.extend(
        [
            [],
            ["AVERAGES"],
            ["Metric", "Value"],
            ["Monthly average", format_money(analytics.averages.monthly_average)],
            ["Service average", format_money(analytics.averages.service_average)],
            ["Cost per km", format_per_km(analytics.cost_per_km)],
            ["Cost per day", format_money(analytics.cost_per_day)],
        ]
    )
    return rows


def analytics_to_csv(
    analytics: CostAnalytics,
    car: Optional[Car] = None,
    report_date: Optional[date] = None,
) -> str:
    return _write(_header_rows("Cost analytics", car, report_date) + analytics_rows(analytics))


def timeline_rows(events: Iterable[MaintenanceEvent]) -> List[List[str]]:
    rows = [TIMELINE_HEADER]
    for event in events:
        rows.append(
            [
                event.date.date().isoformat() if event.date else "",
                event.type.value,
                event.title,
                event.description,
                event.status.value,
                event.urgency.value,
                f"{event.cost:.2f}" if event.cost else "0",
            ]
        )
    return rows


def timeline_to_csv(
    events: Iterable[MaintenanceEvent],
    car: Optional[Car] = None,
    report_date: Optional[date] = None,
) -> str:
    return _write(_header_rows("Timeline", car, report_date) + timeline_rows(events))
