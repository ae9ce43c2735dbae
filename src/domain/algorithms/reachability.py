from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from src.domain.models.gtfs import GtfsTrip, StopTime


def _first_index(stop_times: Sequence[StopTime], stop_id: str) -> int:
    for i, st in enumerate(stop_times):
        if st.stop_id == stop_id:
            return i
    return -1


def eligible_origins(
    destination_id: str,
    trips: Iterable[GtfsTrip],
    stop_times_by_trip: Mapping[str, Sequence[StopTime]],
) -> set[str]:
    """Stop ids from which destination_id is reachable with at most one transfer.

    Used to narrow the stops an address or a position may snap to. Times are
    ignored: this is a topological check over trip stop orderings.
    """

    trips = tuple(trips)

    direct: set[str] = set()
    for trip in trips:
        stop_times = stop_times_by_trip.get(trip.trip_id)
        if not stop_times:
            continue
        dest_index = _first_index(stop_times, destination_id)
        if dest_index <= 0:
            continue
        direct.update(st.stop_id for st in stop_times[:dest_index])

    transfer: set[str] = set()
    if direct:
        for trip in trips:
            stop_times = stop_times_by_trip.get(trip.trip_id)
            if not stop_times:
                continue
            # Every stop before the last direct-reachable stop on this trip can
            # ride there and change.
            last = -1
            for i, st in enumerate(stop_times):
                if st.stop_id in direct:
                    last = i
            if last > 0:
                transfer.update(st.stop_id for st in stop_times[:last])

    return direct | transfer
