#!/usr/bin/env python3
"""
Unified CLI for vehicle maintenance cost analytics.

Commands:
  report    - Show the cost analytics report
  timeline  - Show the unified event timeline
  compare   - Compare costs with the previous month/quarter/year
  top       - List the most expensive events
  export    - Write the analytics or timeline as CSV
  alerts    - Show services, expiries and issues needing attention
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from maintcost import (
    CostAnalytics,
    MaintenanceAlert,
    MaintenanceEvent,
    TimelineGroup,
    TopExpense,
    alert_counts,
    analytics_to_csv,
    compare_periods,
    load_vehicle_records,
    needs_attention,
    timeline_to_csv,
)
from maintcost.calculations import parse_date
from maintcost.comparator import PERIOD_MONTHS
from maintcost.status import EventStatus, EventType
from maintcost.timeline import GROUP_MODES

# =============================================================================
# Formatting helpers
# =============================================================================


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"{cost:,.2f}" if cost is not None else "-"


def format_percentage(value: Optional[float]) -> str:
    """Format a percentage with one decimal."""
    return f"{value:.1f}%" if value is not None else "-"


def format_date(moment: Optional[datetime]) -> str:
    """Format an event date for display."""
    return moment.date().isoformat() if moment is not None else "-"


def truncate(text: Optional[str], max_len: int = 40) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def resolve_now(as_of: Optional[str]) -> datetime:
    """The instant reports are computed for: --as-of if given, else now."""
    if as_of is None:
        return datetime.now()
    moment = parse_date(as_of)
    if moment is None:
        raise ValueError(f"Invalid --as-of date '{as_of}' (expected YYYY-MM-DD)")
    return moment


# =============================================================================
# Report command
# =============================================================================


def make_monthly_table(analytics: CostAnalytics) -> List[List[str]]:
    """Convert monthly buckets to table rows."""
    return [
        [
            f"{m.month} {m.year}",
            format_cost(m.service),
            format_cost(m.registration),
            format_cost(m.insurance),
            format_cost(m.issues),
            format_cost(m.total),
        ]
        for m in analytics.monthly_costs
    ]


def make_category_table(analytics: CostAnalytics) -> List[List[str]]:
    """Convert the category breakdown to table rows."""
    return [
        [c.name, format_cost(c.value), format_percentage(c.percentage)]
        for c in analytics.category_breakdown
    ]


def cmd_report(args, records, now):
    """Show the cost analytics report."""
    analytics = records.analytics(now)
    totals = analytics.total_costs

    print(f"Total costs: {format_cost(totals.all)}")
    print()

    if analytics.category_breakdown:
        print("BY CATEGORY:")
        print(
            tabulate(
                make_category_table(analytics),
                headers=["Category", "Amount", "Share"],
                tablefmt="simple",
                disable_numparse=True,
            )
        )
        print()

    print("LAST 12 MONTHS:")
    print(
        tabulate(
            make_monthly_table(analytics),
            headers=["Month", "Service", "Registration", "Insurance", "Issues", "Total"],
            tablefmt="simple",
            disable_numparse=True,
        )
    )
    print()

    rows = [
        ["Monthly average", format_cost(analytics.averages.monthly_average)],
        ["Service average", format_cost(analytics.averages.service_average)],
        ["Next month (est.)", format_cost(analytics.projections.next_month_estimate)],
        ["Next quarter (est.)", format_cost(analytics.projections.next_quarter_estimate)],
        ["Year end (est.)", format_cost(analytics.projections.year_end_estimate)],
        [
            "Cost per km",
            f"{analytics.cost_per_km:,.3f}" if analytics.cost_per_km is not None else "-",
        ],
        ["Cost per day", format_cost(analytics.cost_per_day)],
    ]
    print(
        tabulate(
            rows, headers=["Metric", "Value"], tablefmt="simple", disable_numparse=True
        )
    )

    if analytics.yearly_trends:
        print()
        print("BY YEAR:")
        print(
            tabulate(
                [
                    [str(y.year), format_cost(y.total), format_cost(y.average_monthly)]
                    for y in analytics.yearly_trends
                ],
                headers=["Year", "Total", "Avg / month"],
                tablefmt="simple",
                disable_numparse=True,
            )
        )

    return 0


# =============================================================================
# Timeline command
# =============================================================================


def make_event_table(events: List[MaintenanceEvent]) -> List[List[str]]:
    """Convert events to table rows."""
    rows = []
    for event in events:
        rows.append(
            [
                format_date(event.date),
                event.type.value,
                truncate(event.title, 30),
                truncate(event.description),
                event.status.value,
                event.urgency.value,
                format_cost(event.cost),
            ]
        )
    return rows


def cmd_timeline(args, records, now):
    """Show the unified event timeline."""
    groups: List[TimelineGroup] = records.timeline(
        now,
        group_by=args.group_by,
        search=args.search,
        event_type=args.type,
        status=args.status,
    )

    if not groups:
        print("No events found.")
        return 0

    headers = ["Date", "Type", "Title", "Description", "Status", "Urgency", "Cost"]
    for group in groups:
        if args.group_by != "none":
            print(f"{group.label.upper()} ({len(group.events)}):")
        print(
            tabulate(
                make_event_table(group.events),
                headers=headers,
                tablefmt="simple",
                disable_numparse=True,
            )
        )
        print()

    return 0


# =============================================================================
# Compare command
# =============================================================================


def cmd_compare(args, records, now):
    """Compare costs with the previous period."""
    analytics = records.analytics(now)
    comparison = compare_periods(analytics.monthly_costs, args.period)

    rows = [
        ["Current", format_cost(comparison.current)],
        ["Previous", format_cost(comparison.previous)],
        ["Change", format_cost(comparison.change)],
        ["Change %", format_percentage(comparison.change_percentage)],
    ]
    print(f"Period: {comparison.period}")
    print(tabulate(rows, tablefmt="simple", disable_numparse=True))
    return 0


# =============================================================================
# Top command
# =============================================================================


def make_expense_table(expenses: List[TopExpense]) -> List[List[str]]:
    """Convert top expenses to table rows."""
    return [
        [
            str(rank),
            format_date(e.date),
            e.type,
            truncate(e.description),
            format_cost(e.amount),
        ]
        for rank, e in enumerate(expenses, start=1)
    ]


def cmd_top(args, records, now):
    """List the most expensive events."""
    if args.limit < 0:
        print("Error: --limit must not be negative")
        return 1
    expenses = records.top_expenses(now, args.limit)
    if not expenses:
        print("No cost-bearing events found.")
        return 0
    headers = ["#", "Date", "Type", "Description", "Amount"]
    print(
        tabulate(
            make_expense_table(expenses),
            headers=headers,
            tablefmt="simple",
            disable_numparse=True,
        )
    )
    return 0


# =============================================================================
# Alerts command
# =============================================================================


def make_alert_table(alerts: List[MaintenanceAlert]) -> List[List[str]]:
    """Convert alerts to table rows."""
    return [[a.urgency.value.upper(), a.type.value, a.title, a.message] for a in alerts]


def cmd_alerts(args, records, now):
    """Show what needs attention."""
    alerts = records.alerts(now)
    if not needs_attention(alerts):
        print("Nothing needs attention.")
        return 0

    counts = alert_counts(alerts)
    print(f"Alerts: {counts['critical']} critical, {counts['warning']} warning")
    print()
    print(
        tabulate(
            make_alert_table(alerts),
            headers=["Urgency", "Type", "Title", "Message"],
            tablefmt="simple",
            disable_numparse=True,
        )
    )
    return 1 if args.fail_on_critical and counts["critical"] else 0


# =============================================================================
# Export command
# =============================================================================


def cmd_export(args, records, now):
    """Write the analytics report or the timeline as CSV."""
    if args.what == "analytics":
        content = analytics_to_csv(records.analytics(now), records.car, now.date())
    else:
        content = timeline_to_csv(records.events(now), records.car, now.date())

    if args.output is None:
        sys.stdout.write(content)
        return 0

    args.output.write_text(content, encoding="utf-8")
    print(f"Wrote {args.what} to {args.output}")
    return 0


# =============================================================================
# Main
# =============================================================================


def main():
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance cost analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/golf.yaml report
  %(prog)s vehicles/golf.yaml --as-of 2026-10-01 report
  %(prog)s vehicles/golf.yaml timeline --group-by type --status overdue
  %(prog)s vehicles/golf.yaml timeline --search "oil"
  %(prog)s vehicles/golf.yaml compare --period quarter
  %(prog)s vehicles/golf.yaml top --limit 10
  %(prog)s vehicles/golf.yaml export analytics --output costs.csv
  %(prog)s vehicles/golf.yaml alerts --fail-on-critical
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to vehicle records YAML file",
    )
    parser.add_argument(
        "--as-of",
        type=str,
        help="Compute as of this date (YYYY-MM-DD, default: now)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log dropped fields and other diagnostics",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Report subcommand
    subparsers.add_parser("report", help="Show the cost analytics report")

    # Timeline subcommand
    timeline_parser = subparsers.add_parser("timeline", help="Show the event timeline")
    timeline_parser.add_argument(
        "--group-by",
        choices=GROUP_MODES,
        default="month",
        help="Grouping (default: month)",
    )
    timeline_parser.add_argument(
        "--search",
        type=str,
        help="Only events whose title or description contains text (case-insensitive)",
    )
    timeline_parser.add_argument(
        "--type",
        choices=[t.value for t in EventType],
        help="Only events of this type",
    )
    timeline_parser.add_argument(
        "--status",
        choices=[s.value for s in EventStatus],
        help="Only events with this status",
    )

    # Compare subcommand
    compare_parser = subparsers.add_parser(
        "compare", help="Compare costs with the previous period"
    )
    compare_parser.add_argument(
        "--period",
        choices=list(PERIOD_MONTHS),
        default="month",
        help="Comparison period (default: month)",
    )

    # Top subcommand
    top_parser = subparsers.add_parser("top", help="List the most expensive events")
    top_parser.add_argument(
        "--limit",
        type=int,
        default=5,
        help="Number of expenses to list (default: 5)",
    )

    # Alerts subcommand
    alerts_parser = subparsers.add_parser("alerts", help="Show items needing attention")
    alerts_parser.add_argument(
        "--fail-on-critical",
        action="store_true",
        help="Exit with status 1 when any alert is critical",
    )

    # Export subcommand
    export_parser = subparsers.add_parser("export", help="Export as CSV")
    export_parser.add_argument(
        "what",
        choices=["analytics", "timeline"],
        help="What to export",
    )
    export_parser.add_argument(
        "--output",
        type=Path,
        help="Destination file (default: stdout)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Validate vehicle file exists
    if not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1

    try:
        now = resolve_now(args.as_of)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    records = load_vehicle_records(args.vehicle_file)

    # Header (not for CSV on stdout)
    if not (args.command == "export" and args.output is None):
        if records.car:
            print(f"Vehicle: {records.car.name}")
            if records.car.license_plate:
                print(f"License plate: {records.car.license_plate}")
        print(f"As of: {now.date().isoformat()}")
        print(f"Records: {records.record_count}")
        print()

    # Dispatch to command handler
    if args.command == "report":
        return cmd_report(args, records, now)
    elif args.command == "timeline":
        return cmd_timeline(args, records, now)
    elif args.command == "compare":
        return cmd_compare(args, records, now)
    elif args.command == "top":
        return cmd_top(args, records, now)
    elif args.command == "alerts":
        return cmd_alerts(args, records, now)
    elif args.command == "export":
        return cmd_export(args, records, now)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
