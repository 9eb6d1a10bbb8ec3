from __future__ import annotations

import math

from househelp.domain.entities.location import LocationReading

EARTH_RADIUS_METERS = 6371e3
SIGNIFICANT_CHANGE_METERS = 10.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two coordinates in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def is_significant_change(
    new: LocationReading,
    old: LocationReading,
    threshold_meters: float = SIGNIFICANT_CHANGE_METERS,
) -> bool:
    distance = haversine_distance(new.latitude, new.longitude, old.latitude, old.longitude)
    return distance > threshold_meters
