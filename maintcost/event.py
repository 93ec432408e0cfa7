"""MaintenanceEvent dataclass: one normalized record of any source type."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from .status import Category, EventStatus, EventType, Urgency


@dataclass(frozen=True)
class MaintenanceEvent:
    """A service, registration, insurance or issue record in a common shape."""

    id: str
    type: EventType
    date: Optional[datetime]
    title: str
    description: str
    status: EventStatus
    urgency: Urgency
    cost: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def category(self) -> Category:
        return Category.for_event_type(self.type)

    @property
    def is_dated(self) -> bool:
        return self.date is not None

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-safe representation."""
        return {
            "id": self.id,
            "type": self.type.value,
            "date": self.date.isoformat() if self.date else None,
            "title": self.title,
            "description": self.description,
            "cost": self.cost,
            "status": self.status.value,
            "urgency": self.urgency.value,
            "metadata": {
                key: value.isoformat() if isinstance(value, datetime) else value
                for key, value in self.metadata.items()
            },
        }
