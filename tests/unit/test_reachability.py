from __future__ import annotations

from src.domain.algorithms.reachability import eligible_origins

STOPS = {s: (50.0, -105.0 + i * 0.01) for i, s in enumerate("ABCDXYZ")}


def _trip(trip_id: str, *calls: tuple[str, str]):
    return (
        trip_id,
        None,
        [(stop, f"{hhmm}:00", f"{hhmm}:00", seq) for seq, (stop, hhmm) in enumerate(calls, 1)],
    )


def test_direct_and_one_transfer_origins(make_index) -> None:
    index = make_index(
        STOPS,
        [
            # X rides to Y, then changes to the trip that reaches D.
            _trip("T1", ("X", "08:00"), ("Y", "08:10")),
            _trip("T2", ("A", "08:00"), ("Y", "08:15"), ("D", "08:30")),
            # Runs away from D: never an origin.
            _trip("T3", ("D", "09:00"), ("Z", "09:10")),
        ],
    )

    result = eligible_origins("D", index.trips, index.stop_times_by_trip)

    assert {"A", "Y"} <= result
    assert "X" in result
    assert "Z" not in result


def test_destination_only_at_trip_start_is_unreachable(make_index) -> None:
    index = make_index(STOPS, [_trip("T1", ("D", "08:00"), ("A", "08:10"))])

    assert eligible_origins("D", index.trips, index.stop_times_by_trip) == set()


def test_trips_without_stop_times_are_ignored(make_index) -> None:
    index = make_index(STOPS, [_trip("T1", ("A", "08:00"), ("D", "08:10"))])

    assert eligible_origins("D", index.trips, {}) == set()
    assert eligible_origins("D", index.trips, index.stop_times_by_trip) == {"A"}
