from __future__ import annotations

from dataclasses import dataclass, field, replace

from src.app.ports.output import IGtfsRepository
from src.domain.algorithms.itinerary import plan_itinerary
from src.domain.algorithms.nearest_stop import pick_nearest_stop
from src.domain.algorithms.reachability import eligible_origins
from src.domain.algorithms.schedule_index import build_index_from_feed
from src.domain.exceptions import UnknownStopError
from src.domain.models import (
    DirectPlan,
    GeoPoint,
    GtfsRoute,
    NearestStop,
    PlanError,
    PlanResult,
    ScheduleIndex,
    Stop,
    TransferItinerary,
    TripPlan,
)

Endpoint = str | GeoPoint

NO_SERVING_STOPS_ERROR = "No stops found that serve that destination."


@dataclass(slots=True)
class TripPlannerService:
    """Application service (use case) for stop-to-stop trip planning.

    The schedule index is built on first use and then shared by every query;
    queries never mutate it.
    """

    gtfs_repository: IGtfsRepository

    # Tuning knobs
    max_alternatives: int | None = None
    proximity_alighting: bool = True

    _index: ScheduleIndex | None = field(default=None, init=False, repr=False)

    def index(self) -> ScheduleIndex:
        if self._index is None:
            self._index = build_index_from_feed(self.gtfs_repository.load_feed())
        return self._index

    def plan(
        self, *, origin: Endpoint, destination: Endpoint, now_minutes: float
    ) -> TripPlan:
        index = self.index()

        dest_distance_km: float | None = None
        destination_coord: GeoPoint | None = None
        if isinstance(destination, GeoPoint):
            nearest = pick_nearest_stop(
                list(index.stops_by_id.values()), [], destination
            )
            if nearest is None:
                return TripPlan(
                    origin=None,
                    destination=None,
                    result=PlanError(NO_SERVING_STOPS_ERROR),
                )
            dest_stop = nearest.stop
            dest_distance_km = nearest.distance_km
            if self.proximity_alighting:
                destination_coord = destination
        else:
            dest_stop = self._stop(destination)

        origin_distance_km: float | None = None
        if isinstance(origin, GeoPoint):
            nearest = self.nearest_stop(origin, destination_stop_id=dest_stop.id)
            if nearest is None:
                return TripPlan(
                    origin=None,
                    destination=dest_stop,
                    result=PlanError(NO_SERVING_STOPS_ERROR),
                    destination_distance_km=dest_distance_km,
                )
            origin_stop = nearest.stop
            origin_distance_km = nearest.distance_km
        else:
            origin_stop = self._stop(origin)

        result = plan_itinerary(
            origin_stop,
            dest_stop,
            now_minutes,
            index,
            destination_coord=destination_coord,
        )
        return TripPlan(
            origin=origin_stop,
            destination=dest_stop,
            result=self._limit_alternatives(result),
            origin_distance_km=origin_distance_km,
            destination_distance_km=dest_distance_km,
        )

    def list_stops(self) -> tuple[Stop, ...]:
        stops = list(self.index().stops_by_id.values())
        stops.sort(key=lambda s: (s.name.casefold(), s.id))
        return tuple(stops)

    def list_routes(self) -> tuple[GtfsRoute, ...]:
        routes = list(self.index().routes_by_id.values())
        routes.sort(key=lambda r: (r.short_name or "", r.long_name or "", r.route_id))
        return tuple(routes)

    def eligible_origin_stops(self, destination_stop_id: str) -> list[Stop]:
        """Stops that can reach the destination directly or with one transfer."""

        index = self.index()
        dest = self._stop(destination_stop_id)
        ids = eligible_origins(dest.id, index.trips, index.stop_times_by_trip)
        return [s for s in index.stops_by_id.values() if s.id in ids]

    def nearest_stop(
        self, point: GeoPoint, *, destination_stop_id: str | None = None
    ) -> NearestStop | None:
        all_stops = list(self.index().stops_by_id.values())
        if destination_stop_id is None:
            return pick_nearest_stop(all_stops, [], point)
        # An imperfect nearest stop beats none when nothing reaches the
        # destination.
        eligible = self.eligible_origin_stops(destination_stop_id)
        return pick_nearest_stop(eligible, all_stops, point)

    def _stop(self, stop_id: str) -> Stop:
        stop = self.index().stops_by_id.get(stop_id)
        if stop is None:
            raise UnknownStopError(stop_id)
        return stop

    def _limit_alternatives(self, result: PlanResult) -> PlanResult:
        if self.max_alternatives is None:
            return result
        if isinstance(result, (DirectPlan, TransferItinerary)):
            return replace(
                result, alternatives=result.alternatives[: self.max_alternatives]
            )
        return result
