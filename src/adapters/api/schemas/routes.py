from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator

from src.adapters.api.schemas.common import (
    GeoPointSchema,
    StopSchema,
    TransitRouteSchema,
)


class EndpointSchema(BaseModel):
    """Either a stop id or a coordinate, never both."""

    stop_id: str | None = None
    location: GeoPointSchema | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "EndpointSchema":
        if (self.stop_id is None) == (self.location is None):
            raise ValueError("Provide exactly one of stop_id or location")
        return self


class PlanRequestSchema(BaseModel):
    origin: EndpointSchema
    destination: EndpointSchema
    # Minutes since local midnight in the feed timezone; defaults to now.
    now_minutes: float | None = Field(default=None, ge=0.0)


class CandidateTripSchema(BaseModel):
    trip_id: str
    headsign: str | None = None
    trip_short_name: str | None = None
    route: TransitRouteSchema | None = None
    board_stop: StopSchema
    alight_stop: StopSchema
    board_time: str
    alight_time: str
    board_time_display: str
    alight_time_display: str
    board_sequence: float
    alight_sequence: float


class TransferPlanSchema(BaseModel):
    first_leg: CandidateTripSchema
    second_leg: CandidateTripSchema
    transfer_stop: StopSchema
    layover_minutes: float
    total_minutes: float


class PlanErrorSchema(BaseModel):
    kind: Literal["error"] = "error"
    message: str


class DirectPlanSchema(BaseModel):
    kind: Literal["direct"] = "direct"
    next_trip: CandidateTripSchema
    alternatives: list[CandidateTripSchema] = []
    service_note: str | None = None


class TransferItinerarySchema(BaseModel):
    kind: Literal["transfer"] = "transfer"
    next_transfer: TransferPlanSchema
    alternatives: list[TransferPlanSchema] = []
    service_note: str | None = None


PlanResultSchema = Annotated[
    Union[PlanErrorSchema, DirectPlanSchema, TransferItinerarySchema],
    Field(discriminator="kind"),
]


class TripPlanSchema(BaseModel):
    now_minutes: float
    origin: StopSchema | None = None
    destination: StopSchema | None = None
    origin_distance_km: float | None = None
    destination_distance_km: float | None = None
    result: PlanResultSchema
