from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from src.domain.algorithms.geo_utils import haversine_distance_km
from src.domain.algorithms.gtfs_time import time_to_minutes
from src.domain.models import GeoPoint, Stop
from src.domain.models.gtfs import GtfsTrip, ScheduleIndex, StopTime
from src.domain.models.plan import (
    NO_MORE_DEPARTURES_NOTE,
    CandidateTrip,
    DirectPlan,
    PlanError,
    PlanResult,
    TransferItinerary,
    TransferPlan,
)

SAME_STOP_ERROR = "Pick two different stops to build a route."
NO_TRIPS_ERROR = "No trips found between those stops."

T = TypeVar("T")


def plan_itinerary(
    origin: Stop,
    destination: Stop,
    now_minutes: float,
    index: ScheduleIndex,
    *,
    destination_coord: GeoPoint | None = None,
) -> PlanResult:
    """Find the next direct trip, or failing that the next one-transfer trip.

    Pure function of its arguments. now_minutes is minutes since service-day
    midnight. When every option has already left, the earliest one is
    returned with a service note instead of an error.

    destination_coord enables the proximity alighting fallback: on trips that
    never reach the destination stop after boarding, the rider gets off at the
    stop closest to that coordinate. This is an approximation, not a schedule
    fact; pass None to search exact stop matches only.
    """

    if origin.id == destination.id:
        return PlanError(SAME_STOP_ERROR)

    direct = direct_candidates(
        origin, destination, index, destination_coord=destination_coord
    )
    if direct:
        ordered = sorted(direct, key=lambda c: c.board_minutes)
        next_trip, alternatives, note = _pick_upcoming(
            ordered, lambda c: c.board_minutes, now_minutes
        )
        return DirectPlan(
            next_trip=next_trip, alternatives=alternatives, service_note=note
        )

    plans = transfer_candidates(origin, destination, index)
    if not plans:
        return PlanError(NO_TRIPS_ERROR)

    ordered_plans = sorted(
        plans, key=lambda p: (p.first_leg.board_minutes, p.total_minutes)
    )
    next_transfer, transfer_alts, note = _pick_upcoming(
        ordered_plans, lambda p: p.first_leg.board_minutes, now_minutes
    )
    return TransferItinerary(
        next_transfer=next_transfer, alternatives=transfer_alts, service_note=note
    )


def direct_candidates(
    origin: Stop,
    destination: Stop,
    index: ScheduleIndex,
    *,
    destination_coord: GeoPoint | None = None,
) -> list[CandidateTrip]:
    out: list[CandidateTrip] = []
    for trip in index.trips:
        stop_times = index.stop_times_by_trip.get(trip.trip_id)
        if not stop_times:
            continue

        board_index = _first_index(stop_times, origin.id)
        if board_index < 0:
            continue
        board = stop_times[board_index]

        alight = _exact_alighting(stop_times, board_index, destination.id)
        if alight is None and destination_coord is not None:
            alight = _closest_alighting(
                stop_times, board_index, destination_coord, index
            )
        if alight is None:
            continue
        if not board.stop_sequence < alight.stop_sequence:
            continue

        leg = _make_leg(trip, board, alight, index)
        if leg is not None:
            out.append(leg)
    return out


def transfer_candidates(
    origin: Stop, destination: Stop, index: ScheduleIndex
) -> list[TransferPlan]:
    """Join every first leg out of origin with every second leg into destination.

    Second legs are bucketed by boarding stop first, so the join is a hash
    lookup on the first leg's alighting stop.
    """

    leg2_by_stop: dict[str, list[tuple[CandidateTrip, float, float]]] = {}
    for trip in index.trips:
        stop_times = index.stop_times_by_trip.get(trip.trip_id)
        if not stop_times:
            continue
        dest_index = _first_index(stop_times, destination.id)
        if dest_index <= 0:
            continue
        alight = stop_times[dest_index]
        for board in stop_times[:dest_index]:
            leg2 = _make_leg(trip, board, alight, index)
            if leg2 is None:
                continue
            leg2_by_stop.setdefault(board.stop_id, []).append(
                (leg2, leg2.board_minutes, leg2.alight_minutes)
            )

    plans: list[TransferPlan] = []
    for trip in index.trips:
        stop_times = index.stop_times_by_trip.get(trip.trip_id)
        if not stop_times:
            continue
        origin_index = _first_index(stop_times, origin.id)
        if origin_index < 0 or origin_index >= len(stop_times) - 1:
            continue
        board = stop_times[origin_index]
        for alight in stop_times[origin_index + 1 :]:
            options = leg2_by_stop.get(alight.stop_id)
            if not options:
                continue
            leg1 = _make_leg(trip, board, alight, index)
            if leg1 is None:
                continue
            leg1_board = leg1.board_minutes
            leg1_alight = leg1.alight_minutes
            for leg2, leg2_board, leg2_alight in options:
                layover = leg2_board - leg1_alight
                # `not >=` also rejects nan from unparseable times.
                if not layover >= 0:
                    continue
                total = leg2_alight - leg1_board
                if not total >= 0:
                    continue
                plans.append(
                    TransferPlan(
                        first_leg=leg1,
                        second_leg=leg2,
                        transfer_stop=leg1.alight_stop,
                        layover_minutes=layover,
                        total_minutes=total,
                    )
                )
    return plans


def _pick_upcoming(
    ordered: Sequence[T], board_minutes: Callable[[T], float], now_minutes: float
) -> tuple[T, tuple[T, ...], str | None]:
    upcoming = [item for item in ordered if board_minutes(item) >= now_minutes]
    if upcoming:
        return upcoming[0], tuple(upcoming[1:]), None
    # Service is over for today: roll over to the first departure.
    return ordered[0], tuple(ordered[1:]), NO_MORE_DEPARTURES_NOTE


def _first_index(stop_times: Sequence[StopTime], stop_id: str) -> int:
    for i, st in enumerate(stop_times):
        if st.stop_id == stop_id:
            return i
    return -1


def _exact_alighting(
    stop_times: Sequence[StopTime], board_index: int, destination_id: str
) -> StopTime | None:
    departs = time_to_minutes(stop_times[board_index].departure_time)
    for st in stop_times[board_index + 1 :]:
        if st.stop_id == destination_id and time_to_minutes(st.arrival_time) > departs:
            return st
    return None


def _closest_alighting(
    stop_times: Sequence[StopTime],
    board_index: int,
    target: GeoPoint,
    index: ScheduleIndex,
) -> StopTime | None:
    departs = time_to_minutes(stop_times[board_index].departure_time)
    best: StopTime | None = None
    best_km = float("inf")
    for st in stop_times[board_index + 1 :]:
        if not time_to_minutes(st.arrival_time) > departs:
            continue
        stop = index.stops_by_id.get(st.stop_id)
        if stop is None:
            continue
        d = haversine_distance_km(stop.location, target)
        if d < best_km:
            best = st
            best_km = d
    return best


def _make_leg(
    trip: GtfsTrip, board: StopTime, alight: StopTime, index: ScheduleIndex
) -> CandidateTrip | None:
    board_stop = index.stops_by_id.get(board.stop_id)
    alight_stop = index.stops_by_id.get(alight.stop_id)
    if board_stop is None or alight_stop is None:
        return None
    return CandidateTrip(
        trip=trip,
        route=index.routes_by_id.get(trip.route_id) if trip.route_id else None,
        board_stop=board_stop,
        alight_stop=alight_stop,
        board_time=board.departure_time,
        alight_time=alight.arrival_time,
        board_sequence=board.stop_sequence,
        alight_sequence=alight.stop_sequence,
    )
