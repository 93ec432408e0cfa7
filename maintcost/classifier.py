"""Derive status and urgency for events from their dates and fields."""

from datetime import datetime
from typing import Optional, Tuple

from .calculations import days_until
from .status import EventStatus, EventType, Urgency

# Expiries closer than this many days are flagged as upcoming
EXPIRY_WARNING_DAYS = 30

ISSUE_STATUS = {
    "open": EventStatus.ACTIVE,
    "in_progress": EventStatus.ACTIVE,
    "resolved": EventStatus.COMPLETED,
}

SEVERITY_URGENCY = {
    "low": Urgency.OK,
    "medium": Urgency.WARNING,
    "high": Urgency.CRITICAL,
}


def classify_expiry(
    expiry: Optional[datetime],
    now: datetime,
    not_urgent: EventStatus = EventStatus.COMPLETED,
) -> Tuple[EventStatus, Urgency]:
    """
    Classify an expiring document (registration or insurance).

    - days < 0: OVERDUE / CRITICAL
    - 0 <= days < EXPIRY_WARNING_DAYS: UPCOMING / WARNING
    - otherwise, or expiry unknown: not_urgent / OK
    """
    if expiry is None:
        return not_urgent, Urgency.OK
    days = days_until(expiry, now)
    if days < 0:
        return EventStatus.OVERDUE, Urgency.CRITICAL
    if days < EXPIRY_WARNING_DAYS:
        return EventStatus.UPCOMING, Urgency.WARNING
    return not_urgent, Urgency.OK


def _code(value) -> str:
    return value.lower() if isinstance(value, str) else ""


def issue_status_for(status: Optional[str]) -> EventStatus:
    """Map an issue report status; unknown or non-text statuses stay ACTIVE."""
    return ISSUE_STATUS.get(_code(status), EventStatus.ACTIVE)


def urgency_for_severity(severity: Optional[str]) -> Urgency:
    """Map an issue severity; absent, unknown or non-text severity is OK."""
    return SEVERITY_URGENCY.get(_code(severity), Urgency.OK)


def classify_event(
    event_type: EventType,
    now: datetime,
    expiry: Optional[datetime] = None,
    severity: Optional[str] = None,
    issue_status: Optional[str] = None,
) -> Tuple[EventStatus, Urgency]:
    """Return (status, urgency) for an event of the given type at now."""
    if event_type == EventType.SERVICE:
        return EventStatus.COMPLETED, Urgency.OK
    if event_type == EventType.REGISTRATION:
        return classify_expiry(expiry, now, not_urgent=EventStatus.COMPLETED)
    if event_type == EventType.INSURANCE:
        return classify_expiry(expiry, now, not_urgent=EventStatus.ACTIVE)
    return issue_status_for(issue_status), urgency_for_severity(severity)
