"""Great-circle distance helpers for nearby-location search."""
from __future__ import annotations

import math
from typing import Iterable, List, Tuple

from app.models import ForagingLocation

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Haversine distance between two WGS84 points in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def nearby_locations(
    locations: Iterable[ForagingLocation],
    lat: float,
    lng: float,
    radius_km: float,
) -> List[Tuple[ForagingLocation, float]]:
    """Locations within ``radius_km`` of the point, nearest first."""
    within = []
    for location in locations:
        distance = distance_km(lat, lng, location.latitude, location.longitude)
        if distance <= radius_km:
            within.append((location, distance))
    within.sort(key=lambda pair: pair[1])
    return within
