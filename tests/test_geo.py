import math

import pytest

from backend.roadrisk.geo import nearest_hub, parse_coordinate, planar_distance_km, within_geofence


def test_one_degree_latitude_is_111_km():
    assert planar_distance_km(10.0, 77.0, 11.0, 77.0) == pytest.approx(111.0)


def test_longitude_scaled_by_origin_latitude():
    expected = 111.0 * math.cos(math.radians(60.0))
    assert planar_distance_km(60.0, 10.0, 60.0, 11.0) == pytest.approx(expected)


@pytest.mark.parametrize("lat,lng,inside", [
    (6.0, 68.0, True), (38.0, 98.0, True), (20.0, 80.0, True),
    (5.99, 80.0, False), (20.0, 98.01, False), (0.0, 0.0, False), (float("nan"), 80.0, False),
])
def test_within_geofence(lat, lng, inside):
    assert within_geofence(lat, lng) is inside


def test_nearest_hub():
    name, dist = nearest_hub(12.9716, 77.5946)
    assert name == "Bengaluru"
    assert dist == pytest.approx(0.0)
    assert nearest_hub(28.7, 77.1)[0] == "Delhi"


@pytest.mark.parametrize("raw,value", [
    ("12.9716", 12.9716), (" -3.5 ", -3.5), ("77.59abc", 77.59), (4, 4.0),
    (None, 0.0), ("", 0.0), ("abc", 0.0), ("nan", 0.0), ("inf", 0.0), (float("nan"), 0.0),
    ("1e1x", 10.0), ("2.5E-1abc", 0.25), ("1e", 1.0), ("1e999", 0.0),
])
def test_parse_coordinate(raw, value):
    assert parse_coordinate(raw) == value
