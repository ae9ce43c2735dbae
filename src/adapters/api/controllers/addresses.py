from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.api.controllers.transit import nearest_to_schema
from src.adapters.api.dependencies import get_address_lookup_service
from src.adapters.api.schemas.addresses import (
    AddressMatchSchema,
    AddressSuggestionSchema,
)
from src.adapters.api.schemas.common import GeoPointSchema
from src.app.services.address_lookup_service import AddressLookupService

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get("/suggest", response_model=list[AddressSuggestionSchema])
async def suggest_addresses(
    q: str = Query(default=""),
    service: AddressLookupService = Depends(get_address_lookup_service),
) -> list[AddressSuggestionSchema]:
    suggestions = await service.suggest(q) or ()
    return [
        AddressSuggestionSchema(
            description=s.description,
            place_id=s.place_id,
            location=(
                GeoPointSchema(lat=s.location.lat, lon=s.location.lon)
                if s.location
                else None
            ),
        )
        for s in suggestions
    ]


@router.get("/resolve", response_model=AddressMatchSchema)
async def resolve_address(
    place_id: str | None = None,
    q: str | None = None,
    destination_stop_id: str | None = None,
    service: AddressLookupService = Depends(get_address_lookup_service),
) -> AddressMatchSchema:
    if not place_id and not (q or "").strip():
        raise HTTPException(status_code=422, detail="Provide place_id or q")

    match = await service.resolve(
        place_id=place_id, query=q, destination_stop_id=destination_stop_id
    )
    if match is None:
        raise HTTPException(status_code=404, detail="Address not found")

    return AddressMatchSchema(
        address=match.address,
        location=GeoPointSchema(lat=match.location.lat, lon=match.location.lon),
        nearest=nearest_to_schema(match.nearest),
    )
