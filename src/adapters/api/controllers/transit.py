from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from src.adapters.api.dependencies import get_trip_planner_service
from src.adapters.api.schemas.common import (
    GeoPointSchema,
    NearestStopSchema,
    StopSchema,
    TransitRouteSchema,
)
from src.app.services.trip_planner_service import TripPlannerService
from src.domain.models import GeoPoint, NearestStop, Stop

router = APIRouter(tags=["transit"])


def stop_to_schema(stop: Stop) -> StopSchema:
    return StopSchema(
        stop_id=stop.id,
        code=stop.code,
        name=stop.name,
        location=GeoPointSchema(lat=stop.location.lat, lon=stop.location.lon),
    )


def nearest_to_schema(nearest: NearestStop | None) -> NearestStopSchema | None:
    if nearest is None:
        return None
    return NearestStopSchema(
        stop=stop_to_schema(nearest.stop), distance_km=nearest.distance_km
    )


@router.get("/stops", response_model=list[StopSchema])
def list_stops(
    service: TripPlannerService = Depends(get_trip_planner_service),
) -> list[StopSchema]:
    return [stop_to_schema(s) for s in service.list_stops()]


@router.get("/stops/nearest", response_model=NearestStopSchema | None)
def nearest_stop(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lon: float = Query(..., ge=-180.0, le=180.0),
    destination_stop_id: str | None = None,
    service: TripPlannerService = Depends(get_trip_planner_service),
) -> NearestStopSchema | None:
    nearest = service.nearest_stop(
        GeoPoint(lat=lat, lon=lon), destination_stop_id=destination_stop_id
    )
    return nearest_to_schema(nearest)


@router.get("/routes", response_model=list[TransitRouteSchema])
def list_routes(
    service: TripPlannerService = Depends(get_trip_planner_service),
) -> list[TransitRouteSchema]:
    return [
        TransitRouteSchema(
            route_id=r.route_id,
            short_name=r.short_name,
            long_name=r.long_name,
        )
        for r in service.list_routes()
    ]
