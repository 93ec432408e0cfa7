"""YAML loading of vehicle record snapshots."""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import yaml

from .car import Car
from .records import InsuranceRecord, IssueReport, RegistrationRecord, ServiceRecord
from .vehicle import VehicleRecords

logger = logging.getLogger(__name__)


def _parse_car(dct: Optional[Dict[str, Any]]) -> Optional[Car]:
    if not isinstance(dct, dict):
        return None
    return Car(
        dct.get("make", ""),
        dct.get("model", ""),
        dct.get("licensePlate"),
        dct.get("year"),
        None if dct.get("id") is None else str(dct["id"]),
    )


def _parse_service(dct: Dict[str, Any], vehicle_id: Optional[str]) -> ServiceRecord:
    return ServiceRecord(
        id=str(dct.get("id")),
        vehicle_id=dct.get("vehicleId", vehicle_id),
        service_date=dct.get("serviceDate"),
        service_type=dct.get("serviceType"),
        mileage=dct.get("mileage"),
        description=dct.get("description"),
        cost=dct.get("cost"),
        next_service_km=dct.get("nextServiceKm"),
        next_service_date=dct.get("nextServiceDate"),
    )


def _parse_registration(dct: Dict[str, Any], vehicle_id: Optional[str]) -> RegistrationRecord:
    return RegistrationRecord(
        id=str(dct.get("id")),
        vehicle_id=dct.get("vehicleId", vehicle_id),
        registration_expiry=dct.get("registrationExpiry"),
        renewal_date=dct.get("renewalDate"),
        notes=dct.get("notes"),
    )


def _parse_insurance(dct: Dict[str, Any], vehicle_id: Optional[str]) -> InsuranceRecord:
    return InsuranceRecord(
        id=str(dct.get("id")),
        vehicle_id=dct.get("vehicleId", vehicle_id),
        insurance_expiry=dct.get("insuranceExpiry"),
        provider=dct.get("provider"),
        policy_number=dct.get("policyNumber"),
        price=dct.get("price"),
    )


def _parse_issue(dct: Dict[str, Any], vehicle_id: Optional[str]) -> IssueReport:
    return IssueReport(
        id=str(dct.get("id")),
        vehicle_id=dct.get("vehicleId", vehicle_id),
        description=dct.get("description") or "",
        status=dct.get("status") or "open",
        reported_at=dct.get("reportedAt"),
        severity=dct.get("severity"),
        resolved_at=dct.get("resolvedAt"),
    )


def _parse_section(
    data: Dict[str, Any],
    key: str,
    parse: Callable[[Dict[str, Any], Optional[str]], Any],
    vehicle_id: Optional[str],
) -> List[Any]:
    """
    Parse one record list.

    A missing or malformed section is replaced with an empty list so the
    other streams still produce a report.
    """
    section = data.get(key)
    if section is None:
        return []
    if not isinstance(section, list):
        logger.warning("Section '%s' is not a list; treating it as empty", key)
        return []
    records = []
    for index, entry in enumerate(section):
        if not isinstance(entry, dict):
            logger.warning("Skipping %s[%d]: not a mapping", key, index)
            continue
        records.append(parse(entry, vehicle_id))
    return records


def records_from_dict(data: Optional[Dict[str, Any]]) -> VehicleRecords:
    """Build VehicleRecords from a parsed snapshot mapping (camelCase keys)."""
    if not isinstance(data, dict):
        return VehicleRecords()
    car = _parse_car(data.get("vehicle"))
    vehicle_id = car.vehicle_id if car else None
    return VehicleRecords(
        car=car,
        services=_parse_section(data, "serviceHistory", _parse_service, vehicle_id),
        registrations=_parse_section(data, "registrations", _parse_registration, vehicle_id),
        insurances=_parse_section(data, "insurance", _parse_insurance, vehicle_id),
        issues=_parse_section(data, "issueReports", _parse_issue, vehicle_id),
    )


def load_vehicle_records(filename: Union[str, Path]) -> VehicleRecords:
    """Load a vehicle record snapshot from a YAML file."""
    with open(filename, "r") as fp:
        data = yaml.load(fp, Loader=yaml.SafeLoader)
    return records_from_dict(data)
