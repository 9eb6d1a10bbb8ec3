from dataclasses import dataclass


@dataclass(frozen=True)
class LocationReading:
    latitude: float
    longitude: float
    accuracy: float | None = None


@dataclass(frozen=True)
class GeofenceResult:
    in_zone: bool
    zone_name: str | None = None
