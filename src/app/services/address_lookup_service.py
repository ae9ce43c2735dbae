from __future__ import annotations

from dataclasses import dataclass, field

from src.app.ports.output import IGeocoder
from src.app.services.trip_planner_service import TripPlannerService
from src.domain.models import AddressMatch, AddressSuggestion, ResolvedAddress


@dataclass(slots=True)
class AddressLookupService:
    """Address autocomplete and address-to-stop snapping.

    suggest() is last-request-wins: a lookup that finishes after a newer one
    has started is discarded and leaves latest_suggestions untouched.
    """

    geocoder: IGeocoder
    planner: TripPlannerService
    suggestion_limit: int = 5

    latest_suggestions: tuple[AddressSuggestion, ...] = ()
    _generation: int = field(default=0, init=False, repr=False)

    async def suggest(self, query: str) -> tuple[AddressSuggestion, ...] | None:
        self._generation += 1
        generation = self._generation

        if not query.strip():
            self.latest_suggestions = ()
            return ()

        results = await self.geocoder.search(query, limit=self.suggestion_limit)
        if generation != self._generation:
            return None

        self.latest_suggestions = results
        return results

    async def resolve(
        self,
        *,
        place_id: str | None = None,
        query: str | None = None,
        destination_stop_id: str | None = None,
    ) -> AddressMatch | None:
        resolved = await self._resolve_address(place_id=place_id, query=query)
        if resolved is None:
            return None

        nearest = self.planner.nearest_stop(
            resolved.location, destination_stop_id=destination_stop_id
        )
        return AddressMatch(
            address=resolved.formatted_address,
            location=resolved.location,
            nearest=nearest,
        )

    async def _resolve_address(
        self, *, place_id: str | None, query: str | None
    ) -> ResolvedAddress | None:
        if place_id:
            return await self.geocoder.resolve_place(place_id)

        text = (query or "").strip()
        if not text:
            return None

        hits = await self.geocoder.search(text, limit=1)
        if not hits:
            return None
        top = hits[0]
        if top.location is not None:
            return ResolvedAddress(
                formatted_address=top.description,
                location=top.location,
                place_id=top.place_id,
            )
        return await self.geocoder.resolve_place(top.place_id)
