from __future__ import annotations

from dataclasses import dataclass, field

from .geo import GeoPoint
from .plan import NearestStop


@dataclass(frozen=True, slots=True)
class AddressSuggestion:
    description: str
    place_id: str
    location: GeoPoint | None = None


@dataclass(frozen=True, slots=True)
class ResolvedAddress:
    formatted_address: str
    location: GeoPoint
    place_id: str | None = None
    # Address components as returned by the geocoder (city, town, state, ...).
    components: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class AddressMatch:
    address: str
    location: GeoPoint
    nearest: NearestStop | None = None
