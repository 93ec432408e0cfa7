"""Filter and group classified events into a presentation timeline."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .event import MaintenanceEvent
from .status import EventStatus, EventType

GROUP_MODES = ("none", "month", "year", "type")

DEFAULT_TYPE_ORDER = (
    EventType.SERVICE,
    EventType.REGISTRATION,
    EventType.INSURANCE,
    EventType.ISSUE,
)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

UNKNOWN_DATE_KEY = "unknown"


@dataclass
class TimelineGroup:
    """Events sharing a group key, newest first."""

    key: str
    label: str
    events: List[MaintenanceEvent] = field(default_factory=list)

    @property
    def newest(self) -> Optional[MaintenanceEvent]:
        return self.events[0] if self.events else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "count": len(self.events),
            "events": [e.to_dict() for e in self.events],
        }


def _as_type(value: Union[EventType, str, None]) -> Optional[EventType]:
    if value is None or value == "all":
        return None
    return value if isinstance(value, EventType) else EventType(value)


def _as_status(value: Union[EventStatus, str, None]) -> Optional[EventStatus]:
    if value is None or value == "all":
        return None
    return value if isinstance(value, EventStatus) else EventStatus(value)


def filter_events(
    events: Iterable[MaintenanceEvent],
    search: Optional[str] = None,
    event_type: Union[EventType, str, None] = None,
    status: Union[EventStatus, str, None] = None,
) -> List[MaintenanceEvent]:
    """
    Return the events matching all given filters as a new list.

    search is a case-insensitive substring match on title or description.
    "all" or None disables the type/status filters.
    """
    wanted_type = _as_type(event_type)
    wanted_status = _as_status(status)
    needle = search.strip().lower() if search else ""

    filtered = []
    for event in events:
        if wanted_type is not None and event.type != wanted_type:
            continue
        if wanted_status is not None and event.status != wanted_status:
            continue
        if needle and needle not in event.title.lower() and needle not in event.description.lower():
            continue
        filtered.append(event)
    return filtered


def sort_newest_first(events: Iterable[MaintenanceEvent]) -> List[MaintenanceEvent]:
    """Newest first, undated last; equal dates keep their input order."""
    events = list(events)
    dated = sorted((e for e in events if e.is_dated), key=lambda e: e.date, reverse=True)
    undated = [e for e in events if not e.is_dated]
    return dated + undated


def _group_key(event: MaintenanceEvent, group_by: str):
    if group_by == "type":
        return event.type.value, event.type.label
    if not event.is_dated:
        return UNKNOWN_DATE_KEY, "Unknown date"
    if group_by == "year":
        return str(event.date.year), str(event.date.year)
    return (
        f"{event.date.year:04d}-{event.date.month:02d}",
        f"{MONTH_NAMES[event.date.month - 1]} {event.date.year}",
    )


def group_events(
    events: Iterable[MaintenanceEvent],
    group_by: str = "month",
    type_order: Sequence[EventType] = DEFAULT_TYPE_ORDER,
) -> List[TimelineGroup]:
    """
    Group events by month, year, type, or not at all ("none").

    Groups are ordered newest first by their newest member, undated groups
    last. Type grouping follows type_order instead (types it leaves out
    come after, in default order) and drops empty types.
    """
    if group_by not in GROUP_MODES:
        raise ValueError(
            f"Unknown grouping '{group_by}' (expected one of {', '.join(GROUP_MODES)})"
        )
    ordered = sort_newest_first(events)
    if not ordered:
        return []
    if group_by == "none":
        return [TimelineGroup(key="all", label="All events", events=ordered)]

    groups: Dict[str, TimelineGroup] = {}
    for event in ordered:
        key, label = _group_key(event, group_by)
        groups.setdefault(key, TimelineGroup(key=key, label=label)).events.append(event)

    if group_by == "type":
        declared = [t.value for t in type_order]
        leftovers = [t.value for t in DEFAULT_TYPE_ORDER if t.value not in declared]
        return [groups[key] for key in declared + leftovers if key in groups]

    dated = [g for g in groups.values() if g.newest.is_dated]
    undated = [g for g in groups.values() if not g.newest.is_dated]
    dated = sorted(dated, key=lambda g: g.newest.date, reverse=True)
    return dated + undated


def build_timeline(
    events: Iterable[MaintenanceEvent],
    group_by: str = "month",
    search: Optional[str] = None,
    event_type: Union[EventType, str, None] = None,
    status: Union[EventStatus, str, None] = None,
    type_order: Sequence[EventType] = DEFAULT_TYPE_ORDER,
) -> List[TimelineGroup]:
    """Filter, then group."""
    filtered = filter_events(events, search=search, event_type=event_type, status=status)
    return group_events(filtered, group_by=group_by, type_order=type_order)
