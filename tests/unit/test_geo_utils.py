from __future__ import annotations

import math

from src.domain.algorithms.geo_utils import EARTH_RADIUS_KM, haversine_distance_km
from src.domain.models.geo import GeoPoint


def test_haversine_zero_for_identical_points() -> None:
    p = GeoPoint(lat=50.39, lon=-105.53)
    assert haversine_distance_km(p, p) == 0.0


def test_haversine_is_symmetric_and_reasonable_scale() -> None:
    # Rough sanity check: 1 degree of latitude is about 111km.
    a = GeoPoint(lat=0.0, lon=0.0)
    b = GeoPoint(lat=1.0, lon=0.0)

    d1 = haversine_distance_km(a, b)
    d2 = haversine_distance_km(b, a)

    assert abs(d1 - d2) < 1e-9
    assert 110.0 < d1 < 112.0


def test_antipodal_points_are_half_the_circumference() -> None:
    a = GeoPoint(lat=0.0, lon=0.0)
    b = GeoPoint(lat=0.0, lon=180.0)

    assert abs(haversine_distance_km(a, b) - math.pi * EARTH_RADIUS_KM) < 1e-6
