import math
from datetime import date, timedelta

from tourwise.schemas.tour import Stop, Tour
from tourwise.schemas.venue import Coordinate

EARTH_RADIUS_KM = 6371.0
TOUR_START = date(2026, 11, 1)


def east_of_origin(km: float, lat: float = 0.0) -> Coordinate:
    """A point ``km`` kilometres east of (0, 0) along the equator."""
    return Coordinate(latitude=lat, longitude=math.degrees(km / EARTH_RADIUS_KM))


def north_of(coord: Coordinate, km: float) -> Coordinate:
    return Coordinate(
        latitude=coord.latitude + math.degrees(km / EARTH_RADIUS_KM),
        longitude=coord.longitude,
    )


def day(n: int) -> date:
    return TOUR_START + timedelta(days=n)


def make_stop(stop_id: int, venue_id: int, sequence: int, status="confirmed", on_day=None, tour_id=1) -> Stop:
    return Stop(
        id=stop_id,
        tour_id=tour_id,
        venue_id=venue_id,
        sequence=sequence,
        date=day(on_day) if on_day is not None else None,
        status=status,
    )


def make_tour(length_days: int = 30, tour_id: int = 1) -> Tour:
    return Tour(
        id=tour_id,
        artist_id=42,
        name="Autumn Run",
        start_date=TOUR_START,
        end_date=day(length_days),
    )
