"""VehicleRecords - the aggregate of one vehicle's four record streams."""

from datetime import datetime
from typing import List, Optional

from .aggregator import DEFAULT_TOP_EXPENSES, top_expenses
from .alerts import MaintenanceAlert, build_alerts
from .breakdown import CostAnalytics, CostReport, TopExpense
from .calculations import as_datetime
from .car import Car
from .event import MaintenanceEvent
from .normalizer import normalize_records
from .records import InsuranceRecord, IssueReport, RegistrationRecord, ServiceRecord
from .report import analytics_from_events, build_report
from .timeline import TimelineGroup, build_timeline, filter_events, sort_newest_first


class VehicleRecords:
    """Point-in-time snapshot of a vehicle's service, registration, insurance and issue records."""

    def __init__(
        self,
        car: Optional[Car] = None,
        services: Optional[List[ServiceRecord]] = None,
        registrations: Optional[List[RegistrationRecord]] = None,
        insurances: Optional[List[InsuranceRecord]] = None,
        issues: Optional[List[IssueReport]] = None,
    ):
        self.car = car
        self.services = services or []
        self.registrations = registrations or []
        self.insurances = insurances or []
        self.issues = issues or []

    @property
    def vehicle_id(self) -> Optional[str]:
        return self.car.vehicle_id if self.car else None

    @property
    def record_count(self) -> int:
        return (
            len(self.services)
            + len(self.registrations)
            + len(self.insurances)
            + len(self.issues)
        )

    def events(self, now: datetime) -> List[MaintenanceEvent]:
        """Normalized and classified events, newest first."""
        now = as_datetime(now)
        events = normalize_records(
            self.services, self.registrations, self.insurances, self.issues, now
        )
        return sort_newest_first(events)

    def analytics(self, now: datetime) -> CostAnalytics:
        now = as_datetime(now)
        events = normalize_records(
            self.services, self.registrations, self.insurances, self.issues, now
        )
        return analytics_from_events(events, self.services, now)

    def report(
        self, now: datetime, period: str = "month", top: int = DEFAULT_TOP_EXPENSES
    ) -> CostReport:
        return build_report(
            self.services,
            self.registrations,
            self.insurances,
            self.issues,
            now,
            period=period,
            top=top,
        )

    def alerts(self, now: datetime) -> List[MaintenanceAlert]:
        """Items needing attention at now, most urgent first."""
        return build_alerts(
            self.services, self.registrations, self.insurances, self.issues, now
        )

    def top_expenses(self, now: datetime, limit: int = DEFAULT_TOP_EXPENSES) -> List[TopExpense]:
        now = as_datetime(now)
        events = normalize_records(
            self.services, self.registrations, self.insurances, self.issues, now
        )
        return top_expenses(events, limit)

    def filtered_events(
        self,
        now: datetime,
        search: Optional[str] = None,
        event_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[MaintenanceEvent]:
        """Newest-first events matching the filters, ungrouped (for exports)."""
        return filter_events(
            self.events(now), search=search, event_type=event_type, status=status
        )

    def timeline(
        self,
        now: datetime,
        group_by: str = "month",
        search: Optional[str] = None,
        event_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[TimelineGroup]:
        return build_timeline(
            self.events(now),
            group_by=group_by,
            search=search,
            event_type=event_type,
            status=status,
        )
