from __future__ import annotations

import logging
import math
from typing import Iterable

from src.domain.models import GeoPoint, Stop
from src.domain.models.gtfs import (
    GtfsFeed,
    GtfsRoute,
    GtfsTrip,
    ScheduleIndex,
    StopRow,
    StopTime,
)

logger = logging.getLogger(__name__)


def build_index(
    stops: Iterable[StopRow],
    routes: Iterable[GtfsRoute],
    trips: Iterable[GtfsTrip],
    stop_times: Iterable[StopTime],
) -> ScheduleIndex:
    """Build the lookup maps used by the planner.

    Never raises for a single bad row: stops with unusable coordinates and
    stop-times with a non-numeric sequence are skipped and counted.
    """

    stops_by_id: dict[str, Stop] = {}
    dropped_stops = 0
    for row in stops:
        if not (math.isfinite(row.lat) and math.isfinite(row.lon)):
            dropped_stops += 1
            continue
        try:
            location = GeoPoint(lat=row.lat, lon=row.lon)
        except ValueError:
            dropped_stops += 1
            continue
        stops_by_id[row.stop_id] = Stop(
            id=row.stop_id, name=row.name, location=location, code=row.code
        )

    routes_by_id: dict[str, GtfsRoute] = {r.route_id: r for r in routes}

    grouped: dict[str, list[StopTime]] = {}
    dropped_stop_times = 0
    for st in stop_times:
        if math.isnan(st.stop_sequence):
            dropped_stop_times += 1
            continue
        grouped.setdefault(st.trip_id, []).append(st)

    stop_times_by_trip: dict[str, tuple[StopTime, ...]] = {}
    tied = 0
    for trip_id, entries in grouped.items():
        # sorted() is stable: rows sharing a sequence number keep file order.
        ordered = sorted(entries, key=lambda st: st.stop_sequence)
        if len({st.stop_sequence for st in ordered}) != len(ordered):
            tied += 1
        stop_times_by_trip[trip_id] = tuple(ordered)

    if dropped_stops:
        logger.warning("Dropped %d stops with invalid coordinates", dropped_stops)
    if dropped_stop_times:
        logger.warning(
            "Dropped %d stop_times with a non-numeric stop_sequence",
            dropped_stop_times,
        )
    if tied:
        logger.warning("%d trips have duplicate stop_sequence values", tied)

    return ScheduleIndex(
        stops_by_id=stops_by_id,
        routes_by_id=routes_by_id,
        trips=tuple(trips),
        stop_times_by_trip=stop_times_by_trip,
    )


def build_index_from_feed(feed: GtfsFeed) -> ScheduleIndex:
    return build_index(feed.stops, feed.routes, feed.trips, feed.stop_times)
