#!/usr/bin/env python3
"""Tests for record normalization into MaintenanceEvents."""

import pytest
from datetime import datetime
from maintcost import (
    EventStatus,
    EventType,
    InsuranceRecord,
    IssueReport,
    RegistrationRecord,
    ServiceRecord,
    Urgency,
    normalize_records,
    records_from_dict,
)


@pytest.fixture
def now():
    return datetime(2026, 10, 5, 12, 0)


class TestNormalizeService:
    """Service records."""

    def test_fields(self, now):
        record = ServiceRecord("7", "car-1", "2026-09-01", "Oil change", mileage=98000, cost=120)
        [event] = normalize_records([record], [], [], [], now)
        assert event.id == "service-7"
        assert event.type == EventType.SERVICE
        assert event.date == datetime(2026, 9, 1)
        assert event.title == "Oil change"
        assert event.description == "Regular service"
        assert event.cost == 120.0
        assert event.status == EventStatus.COMPLETED
        assert event.urgency == Urgency.OK
        assert event.metadata["mileage"] == 98000.0

    def test_description_used_when_present(self, now):
        record = ServiceRecord("7", "car-1", "2026-09-01", "Brakes", description="Front pads")
        [event] = normalize_records([record], [], [], [], now)
        assert event.description == "Front pads"
        assert event.cost is None

    def test_bad_date_kept_as_unknown(self, now):
        """A bad date does not drop the record or its cost."""
        record = ServiceRecord("8", "car-1", "yesterday-ish", "Wash", cost="35")
        [event] = normalize_records([record], [], [], [], now)
        assert event.date is None
        assert event.cost == 35.0

    def test_non_numeric_cost_dropped(self, now):
        record = ServiceRecord("9", "car-1", "2026-09-01", "Wash", cost="free")
        [event] = normalize_records([record], [], [], [], now)
        assert event.cost is None


class TestNormalizeRegistration:
    """Registration records anchor on the renewal date."""

    def test_anchor_and_status(self, now):
        record = RegistrationRecord("3", "car-1", "2026-10-20", "2025-10-20")
        [event] = normalize_records([], [record], [], [], now)
        assert event.id == "registration-3"
        assert event.date == datetime(2025, 10, 20)
        assert event.title == "Registration"
        assert event.description == "Expires 2026-10-20"
        assert event.status == EventStatus.UPCOMING
        assert event.urgency == Urgency.WARNING
        assert event.cost is None
        assert event.metadata["expiry"] == datetime(2026, 10, 20)

    def test_notes_as_description(self, now):
        record = RegistrationRecord("3", "car-1", "2027-06-01", "2026-06-01", notes="Renewed early")
        [event] = normalize_records([], [record], [], [], now)
        assert event.description == "Renewed early"
        assert event.status == EventStatus.COMPLETED

    def test_falls_back_to_expiry_when_renewal_unknown(self, now):
        record = RegistrationRecord("3", "car-1", "2027-06-01", None)
        [event] = normalize_records([], [record], [], [], now)
        assert event.date == datetime(2027, 6, 1)


class TestNormalizeInsurance:
    """Insurance records anchor on the expiry date."""

    def test_fields(self, now):
        record = InsuranceRecord("5", "car-1", "2026-10-15", provider="Allianz", policy_number="P-1", price=300)
        [event] = normalize_records([], [], [record], [], now)
        assert event.id == "insurance-5"
        assert event.date == datetime(2026, 10, 15)
        assert event.title == "Insurance - Allianz"
        assert event.description == "Policy: P-1"
        assert event.cost == 300.0
        assert event.status == EventStatus.UPCOMING

    def test_defaults_without_provider_and_policy(self, now):
        record = InsuranceRecord("5", "car-1", "2026-09-01")
        [event] = normalize_records([], [], [record], [], now)
        assert event.title == "Insurance"
        assert event.description == "Insurance policy"
        assert event.status == EventStatus.OVERDUE
        assert event.urgency == Urgency.CRITICAL


class TestNormalizeIssue:
    """Issue reports anchor on the reported date."""

    def test_fields(self, now):
        record = IssueReport("2", "car-1", "Noise", "open", "2026-10-01T08:00:00", severity="high")
        [event] = normalize_records([], [], [], [record], now)
        assert event.id == "issue-2"
        assert event.date == datetime(2026, 10, 1, 8, 0)
        assert event.title == "Issue - high"
        assert event.description == "Noise"
        assert event.status == EventStatus.ACTIVE
        assert event.urgency == Urgency.CRITICAL
        assert event.cost is None

    def test_unknown_severity_title(self, now):
        record = IssueReport("2", "car-1", "Noise", "resolved", "2026-10-01")
        [event] = normalize_records([], [], [], [record], now)
        assert event.title == "Issue - unknown"
        assert event.status == EventStatus.COMPLETED
        assert event.urgency == Urgency.OK


class TestNonTextFields:
    """Fields of the wrong type are absorbed instead of aborting the batch."""

    def test_numeric_severity_and_status_treated_as_absent(self, now):
        record = IssueReport("3", "car-1", "Noise", 1, "2026-10-01", severity=3)
        [event] = normalize_records([], [], [], [record], now)
        assert event.title == "Issue - unknown"
        assert event.status == EventStatus.ACTIVE
        assert event.urgency == Urgency.OK
        assert event.metadata["severity"] is None

    def test_numeric_text_fields_become_strings(self, now):
        service = ServiceRecord("4", "car-1", "2026-09-01", 5000, description=12)
        insurance = InsuranceRecord("5", "car-1", "2027-01-01", provider=42, policy_number=1001)
        issue = IssueReport("6", "car-1", 404, "open", "2026-10-01")
        events = normalize_records([service], [], [insurance], [issue], now)
        assert [e.title for e in events] == ["5000", "Insurance - 42", "Issue - unknown"]
        assert [e.description for e in events] == ["12", "Policy: 1001", "404"]

    def test_search_and_report_survive_bad_fields(self, now):
        """A whole snapshot with malformed fields still yields a timeline and a report."""
        records = records_from_dict(
            {
                "serviceHistory": [
                    {"id": 1, "serviceDate": "2026-09-01", "serviceType": 5000, "cost": 80}
                ],
                "issueReports": [
                    {"id": 2, "description": "Noise", "severity": 3, "reportedAt": "2026-10-01"}
                ],
            }
        )
        assert records.analytics(now).total_costs.all == 80
        assert [e.id for e in records.filtered_events(now, search="500")] == ["service-1"]
        groups = records.timeline(now, group_by="type", search="noise")
        assert [g.key for g in groups] == ["issue"]


class TestNormalizeRecords:
    """Whole-batch behavior."""

    def test_empty_inputs(self, now):
        assert normalize_records([], [], [], [], now) == []

    def test_order_is_by_source_then_input(self, now):
        events = normalize_records(
            [ServiceRecord("1", None, "2026-01-01", "A"), ServiceRecord("2", None, "2026-02-01", "B")],
            [RegistrationRecord("1", None, "2027-01-01", "2026-01-01")],
            [InsuranceRecord("1", None, "2027-01-01")],
            [IssueReport("1", None, "x", "open", "2026-03-01")],
            now,
        )
        assert [e.id for e in events] == [
            "service-1",
            "service-2",
            "registration-1",
            "insurance-1",
            "issue-1",
        ]

    def test_same_source_id_across_types_does_not_collide(self, now):
        events = normalize_records(
            [ServiceRecord("1", None, "2026-01-01", "A")],
            [],
            [InsuranceRecord("1", None, "2027-01-01")],
            [],
            now,
        )
        assert len({e.id for e in events}) == 2

    def test_duplicate_source_ids_made_unique(self, now):
        events = normalize_records(
            [
                ServiceRecord("1", None, "2026-01-01", "A"),
                ServiceRecord("1", None, "2026-02-01", "B"),
                ServiceRecord("1", None, "2026-03-01", "C"),
            ],
            [],
            [],
            [],
            now,
        )
        assert [e.id for e in events] == ["service-1", "service-1-2", "service-1-3"]

    def test_tuples_accepted(self, now):
        events = normalize_records((ServiceRecord("1", None, "2026-01-01", "A"),), (), (), (), now)
        assert len(events) == 1

    def test_non_sequence_raises(self, now):
        with pytest.raises(TypeError):
            normalize_records(None, [], [], [], now)
        with pytest.raises(TypeError):
            normalize_records([], "records", [], [], now)

    def test_status_recomputed_for_new_now(self):
        """Same record, later instant: status follows the clock passed in."""
        record = InsuranceRecord("5", None, "2026-10-15", price=300)
        [before] = normalize_records([], [], [record], [], datetime(2026, 8, 1))
        [after] = normalize_records([], [], [record], [], datetime(2026, 10, 20))
        assert before.status == EventStatus.ACTIVE
        assert after.status == EventStatus.OVERDUE
