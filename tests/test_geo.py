from math import pi

import pytest

from halal_bites.services.geo import EARTH_RADIUS_KM, annotate_by_distance, haversine_km

from conftest import ATLANTA


def test_distance_to_self_is_zero():
    assert haversine_km(*ATLANTA, *ATLANTA) == 0


def test_distance_is_symmetric():
    a, b = ATLANTA, (34.2, -84.5)
    assert haversine_km(*a, *b) == pytest.approx(haversine_km(*b, *a))


def test_colinear_points_on_meridian_add_up():
    a, b, c = (30.0, -84.0), (31.5, -84.0), (33.0, -84.0)
    ab = haversine_km(*a, *b)
    bc = haversine_km(*b, *c)
    assert haversine_km(*a, *c) == pytest.approx(ab + bc, rel=1e-9)


def test_one_degree_of_latitude():
    assert haversine_km(0, 0, 1, 0) == pytest.approx(EARTH_RADIUS_KM * pi / 180)


def test_antipodal_points_do_not_raise():
    assert haversine_km(0, 0, 0, 180) == pytest.approx(EARTH_RADIUS_KM * pi)


def test_atlanta_example():
    far = haversine_km(*ATLANTA, 34.2, -84.5)
    assert 45 < far < 60

    restaurants = [
        {"id": "downtown", "latitude": ATLANTA[0], "longitude": ATLANTA[1]},
        {"id": "north", "latitude": 34.2, "longitude": -84.5},
    ]
    result = annotate_by_distance(restaurants, *ATLANTA, radius_km=10)
    assert [r["id"] for r in result] == ["downtown"]
    assert result[0]["distance"] == 0


def test_annotate_drops_missing_coordinates_and_sorts():
    restaurants = [
        {"id": "far", "latitude": 34.2, "longitude": -84.5},
        {"id": "no-lat", "latitude": None, "longitude": -84.4},
        {"id": "near", "latitude": 33.76, "longitude": -84.39},
        {"id": "no-lng", "latitude": 33.75, "longitude": None},
    ]
    result = annotate_by_distance(restaurants, *ATLANTA)
    assert [r["id"] for r in result] == ["near", "far"]
    distances = [r["distance"] for r in result]
    assert distances == sorted(distances)


def test_annotate_radius_is_inclusive_upper_bound():
    restaurants = [{"id": "x", "latitude": 1.0, "longitude": 0.0}]
    exact = haversine_km(0, 0, 1, 0)
    assert annotate_by_distance(restaurants, 0, 0, radius_km=exact) != []
    assert annotate_by_distance(restaurants, 0, 0, radius_km=exact - 0.001) == []


def test_annotate_keeps_store_order_for_ties():
    restaurants = [
        {"id": "first", "latitude": 1.0, "longitude": 0.0},
        {"id": "second", "latitude": -1.0, "longitude": 0.0},
    ]
    result = annotate_by_distance(restaurants, 0, 0)
    assert [r["id"] for r in result] == ["first", "second"]


def test_annotate_does_not_mutate_input():
    restaurants = [{"id": "x", "latitude": 1.0, "longitude": 0.0}]
    annotate_by_distance(restaurants, 0, 0)
    assert "distance" not in restaurants[0]
