from __future__ import annotations

from typing import Callable, Sequence

import pytest

from src.domain.algorithms.schedule_index import build_index
from src.domain.models.gtfs import (
    GtfsFeed,
    GtfsRoute,
    GtfsTrip,
    ScheduleIndex,
    StopRow,
    StopTime,
)

# (stop_id, arrival_time, departure_time, stop_sequence)
StopTimeSpec = tuple[str, str, str, float]
TripSpec = tuple[str, str | None, Sequence[StopTimeSpec]]


def _make_feed(
    stops: dict[str, tuple[float, float]],
    trips: Sequence[TripSpec],
    routes: Sequence[GtfsRoute] = (),
) -> GtfsFeed:
    stop_rows = tuple(
        StopRow(stop_id=sid, code=None, name=f"Stop {sid}", lat=lat, lon=lon)
        for sid, (lat, lon) in stops.items()
    )
    trip_rows = tuple(
        GtfsTrip(trip_id=tid, route_id=rid, headsign=f"To {times[-1][0]}")
        for tid, rid, times in trips
    )
    stop_times = tuple(
        StopTime(
            trip_id=tid,
            stop_id=sid,
            arrival_time=arr,
            departure_time=dep,
            stop_sequence=seq,
        )
        for tid, _, times in trips
        for sid, arr, dep, seq in times
    )
    return GtfsFeed(
        stops=stop_rows, routes=tuple(routes), trips=trip_rows, stop_times=stop_times
    )


@pytest.fixture
def make_feed() -> Callable[..., GtfsFeed]:
    return _make_feed


@pytest.fixture
def make_index() -> Callable[..., ScheduleIndex]:
    def _make(
        stops: dict[str, tuple[float, float]],
        trips: Sequence[TripSpec],
        routes: Sequence[GtfsRoute] = (),
    ) -> ScheduleIndex:
        feed = _make_feed(stops, trips, routes)
        return build_index(feed.stops, feed.routes, feed.trips, feed.stop_times)

    return _make


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
