from __future__ import annotations

from dataclasses import dataclass

from .stop import Stop


@dataclass(frozen=True, slots=True)
class StopRow:
    """Raw stops.txt row. Coordinates are `nan` when unparseable."""

    stop_id: str
    code: str | None
    name: str
    lat: float
    lon: float


@dataclass(frozen=True, slots=True)
class GtfsRoute:
    route_id: str
    short_name: str | None = None
    long_name: str | None = None


@dataclass(frozen=True, slots=True)
class GtfsTrip:
    trip_id: str
    route_id: str | None = None
    headsign: str | None = None
    short_name: str | None = None


@dataclass(frozen=True, slots=True)
class StopTime:
    """A single stop_times.txt row.

    Times are kept as GTFS "HH:MM:SS" strings (hours may exceed 24).
    stop_sequence is `nan` when the source value is not numeric.
    """

    trip_id: str
    stop_id: str
    arrival_time: str
    departure_time: str
    stop_sequence: float


@dataclass(frozen=True, slots=True)
class GtfsFeed:
    """Parsed GTFS tables, before any indexing."""

    stops: tuple[StopRow, ...]
    routes: tuple[GtfsRoute, ...]
    trips: tuple[GtfsTrip, ...]
    stop_times: tuple[StopTime, ...]


@dataclass(frozen=True, slots=True)
class ScheduleIndex:
    """Read-only lookup structures built once from a GtfsFeed.

    stop_times_by_trip holds each trip's stop-times sorted by stop_sequence.
    trips keeps feed order so every scan over it is deterministic.
    """

    stops_by_id: dict[str, Stop]
    routes_by_id: dict[str, GtfsRoute]
    trips: tuple[GtfsTrip, ...]
    stop_times_by_trip: dict[str, tuple[StopTime, ...]]
