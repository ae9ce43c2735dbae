from __future__ import annotations

from pydantic import BaseModel

from src.adapters.api.schemas.common import GeoPointSchema, NearestStopSchema


class AddressSuggestionSchema(BaseModel):
    description: str
    place_id: str
    location: GeoPointSchema | None = None


class AddressMatchSchema(BaseModel):
    address: str
    location: GeoPointSchema
    nearest: NearestStopSchema | None = None
