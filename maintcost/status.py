"""Enums for event types, derived status/urgency and cost categories."""

from enum import Enum


class EventType(Enum):
    """Source stream an event was normalized from."""

    SERVICE = "service"
    REGISTRATION = "registration"
    INSURANCE = "insurance"
    ISSUE = "issue"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class EventStatus(Enum):
    """Derived lifecycle status of an event."""

    COMPLETED = "completed"
    ACTIVE = "active"
    UPCOMING = "upcoming"
    OVERDUE = "overdue"


class Urgency(Enum):
    """Attention level of an event. Lower rank = more urgent."""

    CRITICAL = "critical"
    WARNING = "warning"
    OK = "ok"

    @property
    def rank(self) -> int:
        return {"critical": 1, "warning": 2, "ok": 3}[self.value]


class Category(Enum):
    """Cost classification axis used by the analytics report."""

    SERVICE = "service"
    REGISTRATION = "registration"
    INSURANCE = "insurance"
    ISSUES = "issues"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def color(self) -> str:
        return CATEGORY_COLORS[self]

    @classmethod
    def for_event_type(cls, event_type: EventType) -> "Category":
        if event_type == EventType.ISSUE:
            return cls.ISSUES
        return cls(event_type.value)


# Chart colors, one per category
CATEGORY_COLORS = {
    Category.SERVICE: "#10b981",
    Category.REGISTRATION: "#3b82f6",
    Category.INSURANCE: "#8b5cf6",
    Category.ISSUES: "#ef4444",
}
