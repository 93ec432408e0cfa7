"""Source record classes as delivered by the record store."""

from typing import Any, Optional


class ServiceRecord:
    """A service performed on the vehicle."""

    def __init__(
            self,
            id: str,
            vehicle_id: Optional[str],
            service_date: Any,
            service_type: str,
            mileage: Optional[float] = None,
            description: Optional[str] = None,
            cost: Any = None,
            next_service_km: Optional[float] = None,
            next_service_date: Any = None,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.service_date = service_date
        self.service_type = service_type
        self.mileage = mileage
        self.description = description
        self.cost = cost
        self.next_service_km = next_service_km
        self.next_service_date = next_service_date


class RegistrationRecord:
    """A registration renewal and the expiry it runs until."""

    def __init__(
            self,
            id: str,
            vehicle_id: Optional[str],
            registration_expiry: Any,
            renewal_date: Any,
            notes: Optional[str] = None,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.registration_expiry = registration_expiry
        self.renewal_date = renewal_date
        self.notes = notes


class InsuranceRecord:
    """An insurance policy."""

    def __init__(
            self,
            id: str,
            vehicle_id: Optional[str],
            insurance_expiry: Any,
            provider: Optional[str] = None,
            policy_number: Optional[str] = None,
            price: Any = None,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.insurance_expiry = insurance_expiry
        self.provider = provider
        self.policy_number = policy_number
        self.price = price


class IssueReport:
    """A reported problem with the vehicle."""

    def __init__(
            self,
            id: str,
            vehicle_id: Optional[str],
            description: str,
            status: str,
            reported_at: Any,
            severity: Optional[str] = None,
            resolved_at: Any = None,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.description = description
        self.severity = severity  # low | medium | high
        self.status = status  # open | in_progress | resolved
        self.reported_at = reported_at
        self.resolved_at = resolved_at
