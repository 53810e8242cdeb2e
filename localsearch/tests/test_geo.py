from __future__ import annotations

import numpy as np
import pytest

from localsearch.search.geo import filter_by_radius, haversine_miles

NYC = (40.7128, -74.0060)
CHICAGO = (41.9, -87.6)
SF = (37.7749, -122.4194)
LONDON = (51.5074, -0.1278)
SYDNEY = (-33.8688, 151.2093)


def test_same_point_is_zero_miles():
    assert haversine_miles(*NYC, *NYC) == 0.0


@pytest.mark.parametrize("a, b", [
    (NYC, CHICAGO),
    (NYC, SF),
    (LONDON, SYDNEY),
    (SF, (37.7849, -122.4094)),
    ((0.0, 179.9), (0.0, -179.9)),
])
def test_distance_is_symmetric(a, b):
    assert haversine_miles(*a, *b) == pytest.approx(haversine_miles(*b, *a), rel=1e-12)


def test_nyc_to_chicago_is_about_seven_hundred_miles():
    distance = haversine_miles(*NYC, *CHICAGO)
    assert 700 < distance < 730


def test_one_degree_of_latitude():
    # 2 * pi * 3959 / 360
    assert haversine_miles(0.0, 0.0, 1.0, 0.0) == pytest.approx(69.097, abs=0.01)


def test_vectorised_matches_scalar():
    lats = np.array([CHICAGO[0], SF[0], LONDON[0]])
    lons = np.array([CHICAGO[1], SF[1], LONDON[1]])
    distances = haversine_miles(NYC[0], NYC[1], lats, lons)
    for i, point in enumerate((CHICAGO, SF, LONDON)):
        assert distances[i] == pytest.approx(haversine_miles(*NYC, *point))


def test_radius_keeps_same_point_and_drops_chicago(make_candidate):
    x = make_candidate("X", latitude=NYC[0], longitude=NYC[1])
    y = make_candidate("Y", latitude=CHICAGO[0], longitude=CHICAGO[1])

    kept = filter_by_radius([x, y], NYC[0], NYC[1], 10)

    assert [c.business.name for c in kept] == ["X"]
    assert kept[0].distance == 0.0


def test_radius_containment(make_candidate):
    points = [(40.7 + i * 0.05, -74.0 + i * 0.05) for i in range(20)]
    candidates = [make_candidate(f"B{i}", latitude=lat, longitude=lon) for i, (lat, lon) in enumerate(points)]

    kept = filter_by_radius(candidates, NYC[0], NYC[1], 25)

    assert kept
    assert len(kept) < len(candidates)
    assert all(c.distance is not None and c.distance <= 25 for c in kept)


def test_radius_filter_does_not_mutate_input(make_candidate):
    candidates = [make_candidate("A"), make_candidate("B", latitude=CHICAGO[0], longitude=CHICAGO[1])]

    filter_by_radius(candidates, NYC[0], NYC[1], 10)

    assert all(c.distance is None for c in candidates)


def test_radius_filter_on_empty_list():
    assert filter_by_radius([], NYC[0], NYC[1], 10) == []
