"""
Geographic helpers: points on the globe, great-circle distance and distance units.
"""

import math
from dataclasses import dataclass

from src.core.exceptions import InvalidGuessError
from src.core.shared_types import DistanceUnit

EARTH_RADIUS_KM = 6371.0
KM_TO_MI = 0.621371


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float

    def is_within_bounds(self) -> bool:
        return -90.0 <= self.lat <= 90.0 and -180.0 <= self.lng <= 180.0

    @classmethod
    def checked(cls, lat: float, lng: float) -> "Coordinates":
        """Build coordinates from user input, refusing points that are not on the map."""
        point = cls(float(lat), float(lng))
        if not point.is_within_bounds():
            raise InvalidGuessError(
                f"Coordinates out of range: lat={lat!r} (expected -90..90), lng={lng!r} (expected -180..180)."
            )
        return point


def haversine_km(a: Coordinates, b: Coordinates) -> float:
    """
    Great-circle distance between two points in kilometers.

    NaN in either point comes out as NaN. Well formed event data is a precondition of the caller.
    """
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    d_lat = lat2 - lat1
    d_lng = math.radians(b.lng - a.lng)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    )
    # floating point noise can push h slightly above 1 for antipodal points
    if h > 1.0:
        h = 1.0
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def convert_km(distance_km: float, unit: DistanceUnit) -> float:
    """Express a distance (in km) in the requested unit. Infinity stays infinity."""
    if unit == DistanceUnit.MI:
        return distance_km * KM_TO_MI
    return distance_km
