"""
Maintenance alerts: what needs attention at a given instant.

Four checks, each producing at most one alert per document:
- service: distance and time left until the next service recorded on the
  most recent service entry
- registration: days until the latest registration expires
- insurance: days until each policy's latest expiry
- issues: number of issues still open

Only warning and critical results become alerts; critical ones come first.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from .aggregator import latest_odometer
from .calculations import as_datetime, days_until, parse_date, parse_number
from .classifier import issue_status_for
from .records import InsuranceRecord, IssueReport, RegistrationRecord, ServiceRecord
from .status import EventStatus, EventType, Urgency

SERVICE_KM_CRITICAL = 500
SERVICE_KM_WARNING = 2000
ALERT_CRITICAL_DAYS = 7
ALERT_WARNING_DAYS = 30
OPEN_ISSUES_CRITICAL = 3


@dataclass
class MaintenanceAlert:
    """One item needing attention."""

    id: str
    type: EventType
    urgency: Urgency
    title: str
    message: str
    days_remaining: Optional[int] = None
    km_remaining: Optional[float] = None
    count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "urgency": self.urgency.value,
            "title": self.title,
            "message": self.message,
        }
        if self.days_remaining is not None:
            data["daysRemaining"] = self.days_remaining
        if self.km_remaining is not None:
            data["kmRemaining"] = self.km_remaining
        if self.count is not None:
            data["count"] = self.count
        return data


def km_urgency(km_remaining: Optional[float]) -> Urgency:
    """Urgency from kilometres left until a service is due."""
    if km_remaining is None:
        return Urgency.OK
    if km_remaining < SERVICE_KM_CRITICAL:
        return Urgency.CRITICAL
    if km_remaining < SERVICE_KM_WARNING:
        return Urgency.WARNING
    return Urgency.OK


def days_urgency(days_remaining: Optional[int]) -> Urgency:
    """Urgency from days left until a due date or expiry."""
    if days_remaining is None:
        return Urgency.OK
    if days_remaining < ALERT_CRITICAL_DAYS:
        return Urgency.CRITICAL
    if days_remaining < ALERT_WARNING_DAYS:
        return Urgency.WARNING
    return Urgency.OK


def issue_urgency(open_count: int) -> Urgency:
    if open_count <= 0:
        return Urgency.OK
    if open_count >= OPEN_ISSUES_CRITICAL:
        return Urgency.CRITICAL
    return Urgency.WARNING


def most_urgent(*levels: Urgency) -> Urgency:
    return min(levels, key=lambda u: u.rank, default=Urgency.OK)


def _days_phrase(days: int, ahead: str) -> str:
    if days == 0:
        return "due today"
    plural = "s" if abs(days) != 1 else ""
    if days > 0:
        return f"{ahead} {days} day{plural}"
    return f"overdue by {-days} day{plural}"


def _latest(records, key):
    """The record with the latest parsed key date; on ties the later record wins."""
    best, best_date = None, None
    for record in records:
        moment = key(record)
        if moment is None:
            continue
        if best_date is None or moment >= best_date:
            best, best_date = record, moment
    return best, best_date


def service_alert(
    services: Sequence[ServiceRecord], now: datetime
) -> Optional[MaintenanceAlert]:
    """
    Next-service alert from the newest service that records a next due point.

    km remaining = next_service_km - highest recorded mileage; the worse of
    the distance and time urgencies wins.
    """
    planned = [
        s
        for s in services
        if parse_number(s.next_service_km) is not None or parse_date(s.next_service_date)
    ]
    if not planned:
        return None
    latest, _ = _latest(planned, lambda s: parse_date(s.service_date))
    if latest is None:
        latest = planned[-1]

    km_remaining = None
    due_km = parse_number(latest.next_service_km)
    odometer = latest_odometer(services)
    if due_km is not None and odometer is not None:
        km_remaining = due_km - odometer

    days_remaining = None
    due_date = parse_date(latest.next_service_date)
    if due_date is not None:
        days_remaining = days_until(due_date, now)

    urgency = most_urgent(km_urgency(km_remaining), days_urgency(days_remaining))
    if urgency == Urgency.OK:
        return None

    parts = []
    if km_remaining is not None:
        if km_remaining >= 0:
            parts.append(f"{km_remaining:,.0f} km remaining")
        else:
            parts.append(f"overdue by {-km_remaining:,.0f} km")
    if days_remaining is not None:
        parts.append(_days_phrase(days_remaining, "due in"))
    return MaintenanceAlert(
        id="service",
        type=EventType.SERVICE,
        urgency=urgency,
        title="Service due",
        message="Service " + ", ".join(parts),
        days_remaining=days_remaining,
        km_remaining=km_remaining,
    )


def registration_alert(
    registrations: Sequence[RegistrationRecord], now: datetime
) -> Optional[MaintenanceAlert]:
    """Alert for the latest registration expiry; older ones are superseded."""
    _, expiry = _latest(registrations, lambda r: parse_date(r.registration_expiry))
    if expiry is None:
        return None
    days = days_until(expiry, now)
    urgency = days_urgency(days)
    if urgency == Urgency.OK:
        return None
    return MaintenanceAlert(
        id="registration",
        type=EventType.REGISTRATION,
        urgency=urgency,
        title="Registration expired" if days < 0 else "Registration expiring",
        message="Registration " + _days_phrase(days, "expires in"),
        days_remaining=days,
    )


def _policy_key(record: InsuranceRecord) -> str:
    return str(record.policy_number or record.provider or "")


def insurance_alerts(
    insurances: Sequence[InsuranceRecord], now: datetime
) -> List[MaintenanceAlert]:
    """One alert per policy (keyed by policy number, else provider) on its latest expiry."""
    policies: Dict[str, List[InsuranceRecord]] = {}
    for record in insurances:
        policies.setdefault(_policy_key(record), []).append(record)

    alerts = []
    for records in policies.values():
        latest, expiry = _latest(records, lambda r: parse_date(r.insurance_expiry))
        if expiry is None:
            continue
        days = days_until(expiry, now)
        urgency = days_urgency(days)
        if urgency == Urgency.OK:
            continue
        name = f"Insurance - {latest.provider}" if latest.provider else "Insurance"
        alerts.append(
            MaintenanceAlert(
                id=f"insurance-{latest.id}",
                type=EventType.INSURANCE,
                urgency=urgency,
                title=f"{name} expired" if days < 0 else f"{name} expiring",
                message="Policy " + _days_phrase(days, "expires in"),
                days_remaining=days,
            )
        )
    return alerts


def issues_alert(issues: Sequence[IssueReport]) -> Optional[MaintenanceAlert]:
    open_count = sum(1 for i in issues if issue_status_for(i.status) == EventStatus.ACTIVE)
    urgency = issue_urgency(open_count)
    if urgency == Urgency.OK:
        return None
    return MaintenanceAlert(
        id="issues",
        type=EventType.ISSUE,
        urgency=urgency,
        title="Open issues",
        message=f"{open_count} open issue{'s' if open_count != 1 else ''}",
        count=open_count,
    )


def build_alerts(
    services: Sequence[ServiceRecord],
    registrations: Sequence[RegistrationRecord],
    insurances: Sequence[InsuranceRecord],
    issues: Sequence[IssueReport],
    now: datetime,
) -> List[MaintenanceAlert]:
    """All alerts at now, most urgent first (service, registration, insurance, issues within a level)."""
    now = as_datetime(now)
    alerts = [
        service_alert(services, now),
        registration_alert(registrations, now),
        *insurance_alerts(insurances, now),
        issues_alert(issues),
    ]
    alerts = [a for a in alerts if a is not None]
    return sorted(alerts, key=lambda a: a.urgency.rank)


def alert_counts(alerts: Sequence[MaintenanceAlert]) -> Dict[str, int]:
    return {
        "critical": sum(1 for a in alerts if a.urgency == Urgency.CRITICAL),
        "warning": sum(1 for a in alerts if a.urgency == Urgency.WARNING),
        "total": len(alerts),
    }


def needs_attention(alerts: Sequence[MaintenanceAlert]) -> bool:
    return len(alerts) > 0


def badge_text(alerts: Sequence[MaintenanceAlert]) -> str:
    """Critical count if any, else warning count, else empty."""
    counts = alert_counts(alerts)
    if counts["critical"]:
        return str(counts["critical"])
    if counts["warning"]:
        return str(counts["warning"])
    return ""
