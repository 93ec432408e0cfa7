#!/usr/bin/env python3
"""
Tests for status/urgency classification.

Expiry boundaries: days-until-expiry is rounded up; < 0 is overdue and
0 <= days < 30 is upcoming.
"""

import pytest
from datetime import datetime, timedelta
from maintcost import EventStatus, EventType, Urgency, classify_event
from maintcost.classifier import (
    EXPIRY_WARNING_DAYS,
    classify_expiry,
    issue_status_for,
    urgency_for_severity,
)


@pytest.fixture
def now():
    return datetime(2026, 10, 5, 12, 0)


class TestExpiryBoundaries:
    """Insurance and registration expiry classification."""

    def test_expired_yesterday_is_overdue(self, now):
        expiry = now - timedelta(days=1)
        assert classify_event(EventType.INSURANCE, now, expiry=expiry) == (
            EventStatus.OVERDUE,
            Urgency.CRITICAL,
        )

    def test_expires_today_is_upcoming_not_overdue(self, now):
        assert classify_event(EventType.INSURANCE, now, expiry=now) == (
            EventStatus.UPCOMING,
            Urgency.WARNING,
        )

    def test_date_only_expiry_today_is_upcoming(self, now):
        """Midnight today is already past at noon but still 0 days away."""
        expiry = datetime(2026, 10, 5)
        assert classify_expiry(expiry, now) == (EventStatus.UPCOMING, Urgency.WARNING)

    def test_date_only_expiry_yesterday_is_overdue(self, now):
        expiry = datetime(2026, 10, 4)
        assert classify_expiry(expiry, now) == (EventStatus.OVERDUE, Urgency.CRITICAL)

    def test_29_days_is_upcoming(self, now):
        expiry = now + timedelta(days=29)
        assert classify_event(EventType.INSURANCE, now, expiry=expiry) == (
            EventStatus.UPCOMING,
            Urgency.WARNING,
        )

    def test_30_days_is_not_urgent(self, now):
        expiry = now + timedelta(days=EXPIRY_WARNING_DAYS)
        assert classify_event(EventType.INSURANCE, now, expiry=expiry) == (
            EventStatus.ACTIVE,
            Urgency.OK,
        )

    def test_29_and_a_half_days_rounds_up_to_30(self, now):
        expiry = now + timedelta(days=29, hours=12)
        assert classify_expiry(expiry, now)[1] == Urgency.OK

    def test_registration_not_urgent_is_completed(self, now):
        expiry = now + timedelta(days=200)
        assert classify_event(EventType.REGISTRATION, now, expiry=expiry) == (
            EventStatus.COMPLETED,
            Urgency.OK,
        )

    def test_registration_overdue(self, now):
        expiry = now - timedelta(days=3)
        assert classify_event(EventType.REGISTRATION, now, expiry=expiry) == (
            EventStatus.OVERDUE,
            Urgency.CRITICAL,
        )

    def test_unknown_expiry_is_not_urgent(self, now):
        assert classify_event(EventType.INSURANCE, now, expiry=None) == (
            EventStatus.ACTIVE,
            Urgency.OK,
        )


class TestServiceClassification:
    """Services are historical facts."""

    def test_always_completed(self, now):
        assert classify_event(EventType.SERVICE, now) == (EventStatus.COMPLETED, Urgency.OK)


class TestIssueClassification:
    """Issue status and severity mapping."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            ("open", EventStatus.ACTIVE),
            ("in_progress", EventStatus.ACTIVE),
            ("resolved", EventStatus.COMPLETED),
            ("something_else", EventStatus.ACTIVE),
            (None, EventStatus.ACTIVE),
            (3, EventStatus.ACTIVE),
        ],
    )
    def test_status(self, status, expected):
        assert issue_status_for(status) == expected

    @pytest.mark.parametrize(
        "severity,expected",
        [
            ("high", Urgency.CRITICAL),
            ("medium", Urgency.WARNING),
            ("low", Urgency.OK),
            (None, Urgency.OK),
            (3, Urgency.OK),
        ],
    )
    def test_severity(self, severity, expected):
        assert urgency_for_severity(severity) == expected

    def test_classify_event(self, now):
        assert classify_event(
            EventType.ISSUE, now, severity="high", issue_status="in_progress"
        ) == (EventStatus.ACTIVE, Urgency.CRITICAL)
        assert classify_event(
            EventType.ISSUE, now, severity="medium", issue_status="resolved"
        ) == (EventStatus.COMPLETED, Urgency.WARNING)
