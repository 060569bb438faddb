"""Geo distance model — great-circle distance and travel-time estimates.

Distances are haversine ("as the crow flies") in kilometres; travel time is a
linear road-speed proxy. Neither is a routing engine.
"""

import math

from tourwise.errors import MissingCoordinateError
from tourwise.schemas.venue import Coordinate
from tourwise.services.routing.config import routing_config

cfg = routing_config.geo

KM_PER_MILE = 1.609344


def distance(
    a: Coordinate | None,
    b: Coordinate | None,
    earth_radius_km: float | None = None,
) -> float:
    """Haversine distance in km. Raises MissingCoordinateError if either side is None."""
    if a is None or b is None:
        raise MissingCoordinateError("Cannot compute distance without both coordinates")
    if a == b:
        return 0.0

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lng = math.radians(b.longitude - a.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # Clamp guards against float drift just above 1 for antipodal points
    c = 2 * math.asin(math.sqrt(min(1.0, h)))
    radius = cfg.earth_radius_km if earth_radius_km is None else earth_radius_km
    return radius * c


def leg_distance(
    a: Coordinate | None,
    b: Coordinate | None,
    earth_radius_km: float | None = None,
) -> float | None:
    """Like distance(), but None when a coordinate is missing."""
    try:
        return distance(a, b, earth_radius_km)
    except MissingCoordinateError:
        return None


def travel_time(distance_km: float, average_speed_kmh: float | None = None) -> int:
    """Estimated driving minutes for a distance, rounded to the nearest minute."""
    if distance_km is None:
        raise MissingCoordinateError("Cannot estimate travel time without a distance")
    if distance_km < 0:
        raise ValueError(f"Distance must be non-negative, got {distance_km}")
    speed = cfg.average_speed_kmh if average_speed_kmh is None else average_speed_kmh
    if speed <= 0:
        raise ValueError(f"Average speed must be positive, got {speed}")
    return round(distance_km / speed * 60)


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """Spherical midpoint of two coordinates."""
    if a is None or b is None:
        raise MissingCoordinateError("Cannot compute midpoint without both coordinates")

    lat1, lng1 = math.radians(a.latitude), math.radians(a.longitude)
    lat2 = math.radians(b.latitude)
    d_lng = math.radians(b.longitude - a.longitude)

    bx = math.cos(lat2) * math.cos(d_lng)
    by = math.cos(lat2) * math.sin(d_lng)
    lat = math.atan2(math.sin(lat1) + math.sin(lat2), math.sqrt((math.cos(lat1) + bx) ** 2 + by**2))
    lng = lng1 + math.atan2(by, math.cos(lat1) + bx)

    # Normalize longitude to [-180, 180]
    lng_deg = (math.degrees(lng) + 540) % 360 - 180
    return Coordinate(latitude=math.degrees(lat), longitude=lng_deg)


def km_to_miles(km: float) -> float:
    return km / KM_PER_MILE


def miles_to_km(miles: float) -> float:
    return miles * KM_PER_MILE


def format_distance(distance_km: float) -> str:
    """'850 m' below one kilometre, '12.3 km' otherwise."""
    if distance_km < 1:
        return f"{round(distance_km * 1000)} m"
    return f"{distance_km:.1f} km"
