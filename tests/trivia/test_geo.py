"""Unit tests for src/trivia/geo.py"""

import math

import pytest

from src.core.exceptions import InvalidGuessError
from src.core.shared_types import DistanceUnit
from src.trivia.geo import EARTH_RADIUS_KM, Coordinates, convert_km, haversine_km


def test_distance_to_itself_is_zero() -> None:
    paris = Coordinates(48.8566, 2.3522)
    assert haversine_km(paris, paris) == 0.0


def test_distance_along_the_equator() -> None:
    """A quarter of the equator is a quarter of the circumference."""
    distance = haversine_km(Coordinates(0.0, 0.0), Coordinates(0.0, 90.0))
    assert distance == pytest.approx(math.pi / 2 * EARTH_RADIUS_KM)


def test_antipodal_points() -> None:
    distance = haversine_km(Coordinates(0.0, 0.0), Coordinates(0.0, 180.0))
    assert distance == pytest.approx(math.pi * EARTH_RADIUS_KM)


def test_distance_paris_london() -> None:
    paris = Coordinates(48.8566, 2.3522)
    london = Coordinates(51.5074, -0.1278)
    assert haversine_km(paris, london) == pytest.approx(343.5, abs=2.0)
    # symmetric
    assert haversine_km(paris, london) == pytest.approx(haversine_km(london, paris))


def test_nan_is_not_masked() -> None:
    """Broken event data must show up, not silently turn into a distance."""
    distance = haversine_km(Coordinates(float("nan"), 0.0), Coordinates(10.0, 10.0))
    assert math.isnan(distance)


@pytest.mark.parametrize(
    "lat, lng",
    [
        (90.1, 0.0),
        (-90.1, 0.0),
        (0.0, 180.5),
        (0.0, -181.0),
    ],
)
def test_checked_rejects_points_off_the_map(lat: float, lng: float) -> None:
    with pytest.raises(InvalidGuessError):
        _ = Coordinates.checked(lat, lng)


def test_checked_accepts_the_corners() -> None:
    assert Coordinates.checked(90, -180) == Coordinates(90.0, -180.0)
    assert Coordinates.checked(-90, 180).is_within_bounds()


def test_convert_km() -> None:
    assert convert_km(100.0, DistanceUnit.KM) == 100.0
    assert convert_km(100.0, DistanceUnit.MI) == pytest.approx(62.1371)
    assert convert_km(math.inf, DistanceUnit.MI) == math.inf
