"""Car class for vehicle identification."""

from typing import Optional


class Car:
    """Vehicle identification used in report headers."""

    def __init__(
        self,
        make: str,
        model: str,
        license_plate: Optional[str] = None,
        year: Optional[int] = None,
        vehicle_id: Optional[str] = None,
    ):
        self.make = make
        self.model = model
        self.license_plate = license_plate
        self.year = year
        self.vehicle_id = vehicle_id

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        base = f"{self.make} {self.model}".strip()
        return f"{self.year} {base}" if self.year else base
