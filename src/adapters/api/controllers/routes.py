from __future__ import annotations

from fastapi import APIRouter, Depends

from src.adapters.api.controllers.transit import stop_to_schema
from src.adapters.api.dependencies import (
    current_service_minutes,
    get_trip_planner_service,
)
from src.adapters.api.schemas.common import TransitRouteSchema
from src.adapters.api.schemas.routes import (
    CandidateTripSchema,
    DirectPlanSchema,
    EndpointSchema,
    PlanErrorSchema,
    PlanRequestSchema,
    TransferItinerarySchema,
    TransferPlanSchema,
    TripPlanSchema,
)
from src.app.services.trip_planner_service import Endpoint, TripPlannerService
from src.domain.algorithms.gtfs_time import format_time
from src.domain.models import (
    CandidateTrip,
    DirectPlan,
    GeoPoint,
    PlanError,
    PlanResult,
    TransferItinerary,
    TransferPlan,
    TripPlan,
)

router = APIRouter(tags=["plans"])


def _endpoint(schema: EndpointSchema) -> Endpoint:
    if schema.location is not None:
        return GeoPoint(lat=schema.location.lat, lon=schema.location.lon)
    return schema.stop_id or ""


def _leg_to_schema(leg: CandidateTrip) -> CandidateTripSchema:
    return CandidateTripSchema(
        trip_id=leg.trip.trip_id,
        headsign=leg.trip.headsign,
        trip_short_name=leg.trip.short_name,
        route=(
            TransitRouteSchema(
                route_id=leg.route.route_id,
                short_name=leg.route.short_name,
                long_name=leg.route.long_name,
            )
            if leg.route
            else None
        ),
        board_stop=stop_to_schema(leg.board_stop),
        alight_stop=stop_to_schema(leg.alight_stop),
        board_time=leg.board_time,
        alight_time=leg.alight_time,
        board_time_display=format_time(leg.board_time),
        alight_time_display=format_time(leg.alight_time),
        board_sequence=leg.board_sequence,
        alight_sequence=leg.alight_sequence,
    )


def _transfer_to_schema(plan: TransferPlan) -> TransferPlanSchema:
    return TransferPlanSchema(
        first_leg=_leg_to_schema(plan.first_leg),
        second_leg=_leg_to_schema(plan.second_leg),
        transfer_stop=stop_to_schema(plan.transfer_stop),
        layover_minutes=plan.layover_minutes,
        total_minutes=plan.total_minutes,
    )


def _result_to_schema(
    result: PlanResult,
) -> PlanErrorSchema | DirectPlanSchema | TransferItinerarySchema:
    if isinstance(result, DirectPlan):
        return DirectPlanSchema(
            next_trip=_leg_to_schema(result.next_trip),
            alternatives=[_leg_to_schema(c) for c in result.alternatives],
            service_note=result.service_note,
        )
    if isinstance(result, TransferItinerary):
        return TransferItinerarySchema(
            next_transfer=_transfer_to_schema(result.next_transfer),
            alternatives=[_transfer_to_schema(p) for p in result.alternatives],
            service_note=result.service_note,
        )
    if isinstance(result, PlanError):
        return PlanErrorSchema(message=result.message)
    raise TypeError(f"Unsupported plan result: {type(result).__name__}")


def _plan_to_schema(plan: TripPlan, now_minutes: float) -> TripPlanSchema:
    return TripPlanSchema(
        now_minutes=now_minutes,
        origin=stop_to_schema(plan.origin) if plan.origin else None,
        destination=stop_to_schema(plan.destination) if plan.destination else None,
        origin_distance_km=plan.origin_distance_km,
        destination_distance_km=plan.destination_distance_km,
        result=_result_to_schema(plan.result),
    )


@router.post("/plans", response_model=TripPlanSchema)
def plan_trip(
    req: PlanRequestSchema,
    service: TripPlannerService = Depends(get_trip_planner_service),
) -> TripPlanSchema:
    now_minutes = (
        req.now_minutes if req.now_minutes is not None else current_service_minutes()
    )
    plan = service.plan(
        origin=_endpoint(req.origin),
        destination=_endpoint(req.destination),
        now_minutes=now_minutes,
    )
    return _plan_to_schema(plan, now_minutes)
