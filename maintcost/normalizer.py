"""Convert the four source record streams into MaintenanceEvents."""

import logging
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Sequence, Set

from .calculations import parse_cost, parse_date, parse_number
from .classifier import classify_event
from .event import MaintenanceEvent
from .records import InsuranceRecord, IssueReport, RegistrationRecord, ServiceRecord
from .status import EventType

logger = logging.getLogger(__name__)


def _require_sequence(name: str, value) -> None:
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"{name} must be a list or tuple, got {type(value).__name__}")


def _parse_cost_field(record_id, value):
    cost = parse_cost(value)
    if cost is None and value is not None:
        logger.debug("Record %s: cost %r dropped", record_id, value)
    return cost


def _parse_date_field(record_id, field_name: str, value):
    parsed = parse_date(value)
    if parsed is None and value not in (None, ""):
        logger.debug("Record %s: %s %r is not a date", record_id, field_name, value)
    return parsed


def _text_field(record_id, field_name: str, value) -> Optional[str]:
    """Free text as str; numbers and other scalars are stringified."""
    if value is None or isinstance(value, str):
        return value
    logger.debug("Record %s: %s %r is not text; converted", record_id, field_name, value)
    return str(value)


def _code_field(record_id, field_name: str, value) -> Optional[str]:
    """An enumerated code (severity, status); anything but a string is absent."""
    if value is None or isinstance(value, str):
        return value
    logger.debug("Record %s: %s %r dropped", record_id, field_name, value)
    return None


def normalize_service(record: ServiceRecord, now: datetime) -> MaintenanceEvent:
    status, urgency = classify_event(EventType.SERVICE, now)
    return MaintenanceEvent(
        id=f"service-{record.id}",
        type=EventType.SERVICE,
        date=_parse_date_field(record.id, "service_date", record.service_date),
        title=_text_field(record.id, "service_type", record.service_type) or "Service",
        description=(
            _text_field(record.id, "description", record.description) or "Regular service"
        ),
        cost=_parse_cost_field(record.id, record.cost),
        status=status,
        urgency=urgency,
        metadata={"mileage": parse_number(record.mileage)},
    )


def normalize_registration(
    record: RegistrationRecord, now: datetime
) -> MaintenanceEvent:
    """Anchored on the renewal date; the expiry drives the status."""
    expiry = _parse_date_field(record.id, "registration_expiry", record.registration_expiry)
    renewal = _parse_date_field(record.id, "renewal_date", record.renewal_date)
    status, urgency = classify_event(EventType.REGISTRATION, now, expiry=expiry)

    notes = _text_field(record.id, "notes", record.notes)
    if notes:
        description = notes
    elif expiry is not None:
        description = f"Expires {expiry.date().isoformat()}"
    else:
        description = "Vehicle registration"

    return MaintenanceEvent(
        id=f"registration-{record.id}",
        type=EventType.REGISTRATION,
        date=renewal if renewal is not None else expiry,
        title="Registration",
        description=description,
        status=status,
        urgency=urgency,
        metadata={"expiry": expiry},
    )


def normalize_insurance(record: InsuranceRecord, now: datetime) -> MaintenanceEvent:
    expiry = _parse_date_field(record.id, "insurance_expiry", record.insurance_expiry)
    status, urgency = classify_event(EventType.INSURANCE, now, expiry=expiry)
    provider = _text_field(record.id, "provider", record.provider)
    policy_number = _text_field(record.id, "policy_number", record.policy_number)
    return MaintenanceEvent(
        id=f"insurance-{record.id}",
        type=EventType.INSURANCE,
        date=expiry,
        title=f"Insurance - {provider}" if provider else "Insurance",
        description=f"Policy: {policy_number}" if policy_number else "Insurance policy",
        cost=_parse_cost_field(record.id, record.price),
        status=status,
        urgency=urgency,
        metadata={"expiry": expiry, "provider": provider},
    )


def normalize_issue(record: IssueReport, now: datetime) -> MaintenanceEvent:
    severity = _code_field(record.id, "severity", record.severity)
    issue_status = _code_field(record.id, "status", record.status)
    status, urgency = classify_event(
        EventType.ISSUE, now, severity=severity, issue_status=issue_status
    )
    return MaintenanceEvent(
        id=f"issue-{record.id}",
        type=EventType.ISSUE,
        date=_parse_date_field(record.id, "reported_at", record.reported_at),
        title=f"Issue - {severity or 'unknown'}",
        description=_text_field(record.id, "description", record.description) or "",
        status=status,
        urgency=urgency,
        metadata={
            "severity": severity,
            "issue_status": issue_status,
            "resolved_at": parse_date(record.resolved_at),
        },
    )


def _ensure_unique_ids(events: List[MaintenanceEvent]) -> List[MaintenanceEvent]:
    """Suffix repeated ids with -2, -3, ... keeping the first occurrence as is."""
    used: Set[str] = set()
    unique = []
    for event in events:
        new_id = event.id
        suffix = 1
        while new_id in used:
            suffix += 1
            new_id = f"{event.id}-{suffix}"
        if new_id != event.id:
            logger.debug("Duplicate event id %s renamed to %s", event.id, new_id)
            event = replace(event, id=new_id)
        used.add(new_id)
        unique.append(event)
    return unique


def normalize_records(
    services: Sequence[ServiceRecord],
    registrations: Sequence[RegistrationRecord],
    insurances: Sequence[InsuranceRecord],
    issues: Sequence[IssueReport],
    now: datetime,
) -> List[MaintenanceEvent]:
    """
    Normalize all four streams for one vehicle.

    Output order is services, registrations, insurances, issues, each in
    input order. Raises TypeError if a stream is not a list or tuple.
    """
    _require_sequence("services", services)
    _require_sequence("registrations", registrations)
    _require_sequence("insurances", insurances)
    _require_sequence("issues", issues)

    events = []
    events.extend(normalize_service(r, now) for r in services)
    events.extend(normalize_registration(r, now) for r in registrations)
    events.extend(normalize_insurance(r, now) for r in insurances)
    events.extend(normalize_issue(r, now) for r in issues)
    return _ensure_unique_ids(events)
