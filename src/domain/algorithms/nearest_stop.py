from __future__ import annotations

from typing import Sequence

from src.domain.algorithms.geo_utils import haversine_distance_km
from src.domain.models import GeoPoint, NearestStop, Stop


def nearest_stop(stops: Sequence[Stop], point: GeoPoint) -> NearestStop:
    """Closest stop to point by great-circle distance.

    Ties go to the stop that appears first. stops must not be empty.
    """

    if not stops:
        raise ValueError("nearest_stop() needs at least one stop")

    best = stops[0]
    best_km = haversine_distance_km(best.location, point)
    for stop in stops[1:]:
        d = haversine_distance_km(stop.location, point)
        if d < best_km:
            best = stop
            best_km = d
    return NearestStop(stop=best, distance_km=best_km)


def pick_nearest_stop(
    primary: Sequence[Stop], fallback: Sequence[Stop], point: GeoPoint
) -> NearestStop | None:
    if primary:
        return nearest_stop(primary, point)
    if fallback:
        return nearest_stop(fallback, point)
    return None
