"""
Geo helpers for radius search.

Provides:
1. Haversine distance between two points (kilometers)
2. A bounding box that always CONTAINS a search circle, for cheap SQL
   pre-filtering. The box never decides membership; haversine does.
"""
from math import asin, atan2, cos, degrees, radians, sin, sqrt
from typing import NamedTuple, Optional

from constants import EARTH_RADIUS_KM

# Boundary tolerance: a point computed to lie exactly on the circle may come
# back a few ULPs over the radius after the trig round-trip.
BOUNDARY_EPSILON_KM = 1e-9

# Widen the pre-filter box slightly so float error never clips the circle.
BOX_PADDING = 1.0001


class BoundingBox(NamedTuple):
    min_lat: float
    max_lat: float
    min_lng: Optional[float]  # None = no longitude bound (pole / antimeridian)
    max_lng: Optional[float]


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Calculate the haversine distance between two points on Earth.

    Args:
        lat1, lng1: Coordinates of first point (in degrees)
        lat2, lng2: Coordinates of second point (in degrees)

    Returns:
        Distance in kilometers
    """
    lat1, lng1, lat2, lng2 = map(radians, [lat1, lng1, lat2, lng2])

    dlat = lat2 - lat1
    dlng = lng2 - lng1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlng / 2) ** 2
    # Clamp: rounding can push a just above 1 for antipodal points
    return 2 * EARTH_RADIUS_KM * asin(sqrt(min(1.0, a)))


def within_radius(center_lat: float, center_lng: float,
                  lat: float, lng: float, radius_km: float) -> bool:
    """Inclusive radius test: a point exactly on the boundary is inside."""
    return haversine_km(center_lat, center_lng, lat, lng) <= radius_km + BOUNDARY_EPSILON_KM


def bounding_box(lat: float, lng: float, radius_km: float) -> BoundingBox:
    """
    Compute a lat/lng box containing every point within radius_km of (lat, lng).

    Latitude span is exact along a meridian. Longitude span is widened using
    the latitude in the box closest to a pole. When the box reaches a pole or
    would wrap across the antimeridian, the longitude bound is dropped.
    """
    lat_delta = degrees(radius_km / EARTH_RADIUS_KM) * BOX_PADDING
    min_lat = lat - lat_delta
    max_lat = lat + lat_delta

    if min_lat <= -90 or max_lat >= 90:
        return BoundingBox(max(min_lat, -90.0), min(max_lat, 90.0), None, None)

    widest_lat = max(abs(min_lat), abs(max_lat))
    lng_delta = lat_delta / cos(radians(widest_lat))
    min_lng = lng - lng_delta
    max_lng = lng + lng_delta

    if lng_delta >= 180 or min_lng < -180 or max_lng > 180:
        return BoundingBox(min_lat, max_lat, None, None)

    return BoundingBox(min_lat, max_lat, min_lng, max_lng)


def destination_point(lat: float, lng: float, bearing_deg: float, distance_km: float):
    """
    Point reached travelling distance_km from (lat, lng) on a great circle.

    Returns:
        (lat, lng) tuple in degrees, longitude normalised to [-180, 180)
    """
    angular = distance_km / EARTH_RADIUS_KM
    bearing = radians(bearing_deg)
    lat1, lng1 = radians(lat), radians(lng)

    lat2 = asin(sin(lat1) * cos(angular) + cos(lat1) * sin(angular) * cos(bearing))
    lng2 = lng1 + atan2(
        sin(bearing) * sin(angular) * cos(lat1),
        cos(angular) - sin(lat1) * sin(lat2),
    )
    lng2_deg = (degrees(lng2) + 540) % 360 - 180
    return degrees(lat2), lng2_deg
