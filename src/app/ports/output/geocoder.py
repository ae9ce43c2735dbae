from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import AddressSuggestion, GeoPoint, ResolvedAddress


class IGeocoder(ABC):
    """Port for turning free text or coordinates into addresses.

    Implementations only return results inside the configured service region.
    """

    @abstractmethod
    async def search(
        self, query: str, *, limit: int = 5
    ) -> tuple[AddressSuggestion, ...]:
        raise NotImplementedError

    @abstractmethod
    async def resolve_place(self, place_id: str) -> ResolvedAddress | None:
        raise NotImplementedError

    @abstractmethod
    async def reverse(self, point: GeoPoint) -> ResolvedAddress | None:
        raise NotImplementedError
