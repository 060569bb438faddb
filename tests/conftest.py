import pytest

from tests.helpers import east_of_origin
from tourwise.schemas.venue import Coordinate, Venue


@pytest.fixture
def nyc():
    return Coordinate(latitude=40.7128, longitude=-74.0060)


@pytest.fixture
def la():
    return Coordinate(latitude=34.0522, longitude=-118.2437)


@pytest.fixture
def chicago():
    return Coordinate(latitude=41.8781, longitude=-87.6298)


@pytest.fixture
def line_venues():
    """Venues 1-3 on the equator at 0, 100 and 300 km."""
    return [
        Venue(id=1, name="Origin Hall", region="EQ", capacity=400, coordinate=east_of_origin(0)),
        Venue(id=2, name="Hundred Club", region="EQ", capacity=450, coordinate=east_of_origin(100)),
        Venue(id=3, name="Three Hundred Room", region="EQ", capacity=1500, coordinate=east_of_origin(300)),
    ]


@pytest.fixture
def line_coords(line_venues):
    return {v.id: v.coordinate for v in line_venues}
