from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from src.app.ports.output import IGeocoder
from src.domain.exceptions import GeocodingError
from src.domain.models import AddressSuggestion, GeoPoint, ResolvedAddress
from src.domain.models.geo import BoundingBox


@dataclass(frozen=True, slots=True)
class ServiceRegion:
    """Where geocoded results are allowed to land.

    Both checks are optional; an empty region accepts everything.
    """

    bbox: BoundingBox | None = None
    locality: str | None = None

    @staticmethod
    def from_env() -> "ServiceRegion":
        raw = (os.getenv("GEOCODER_VIEWBOX") or "").strip()
        return ServiceRegion(
            bbox=BoundingBox.parse(raw) if raw else None,
            locality=(os.getenv("GEOCODER_LOCALITY") or "").strip() or None,
        )

    def viewbox_param(self) -> str | None:
        # Nominatim wants x1,y1,x2,y2 as two opposite corners.
        if self.bbox is None:
            return None
        b = self.bbox
        return f"{b.min_lon},{b.max_lat},{b.max_lon},{b.min_lat}"

    def contains(self, point: GeoPoint, components: Mapping[str, str]) -> bool:
        if self.bbox is not None and not self.bbox.contains(point):
            return False
        if self.locality:
            wanted = self.locality.casefold()
            if not any(v.casefold() == wanted for v in components.values()):
                return False
        return True


def _point(item: Mapping[str, Any]) -> GeoPoint | None:
    try:
        return GeoPoint(lat=float(item["lat"]), lon=float(item["lon"]))
    except (KeyError, TypeError, ValueError):
        return None


def _components(item: Mapping[str, Any]) -> dict[str, str]:
    raw = item.get("address")
    if not isinstance(raw, dict):
        return {}
    return {str(k): str(v) for k, v in raw.items()}


@dataclass(slots=True)
class NominatimGeocoder(IGeocoder):
    """OpenStreetMap Nominatim geocoder over HTTP.

    Env vars:
      - NOMINATIM_URL: base URL (default https://nominatim.openstreetmap.org)
      - GEOCODER_COUNTRY_CODES: comma-separated ISO codes (default 'ca')
      - GEOCODER_VIEWBOX / GEOCODER_LOCALITY: service region, see ServiceRegion
      - GEOCODER_TIMEOUT_S: request timeout (default 10)
      - GEOCODER_USER_AGENT: required by the Nominatim usage policy
    """

    base_url: str | None = None
    country_codes: str | None = None
    region: ServiceRegion | None = None
    timeout_s: float = 10.0
    user_agent: str | None = None
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.base_url is None:
            self.base_url = (
                os.getenv("NOMINATIM_URL") or "https://nominatim.openstreetmap.org"
            )
        if self.country_codes is None:
            self.country_codes = os.getenv("GEOCODER_COUNTRY_CODES", "ca")
        if self.region is None:
            self.region = ServiceRegion.from_env()
        if os.getenv("GEOCODER_TIMEOUT_S"):
            self.timeout_s = float(os.environ["GEOCODER_TIMEOUT_S"])
        if self.user_agent is None:
            self.user_agent = os.getenv("GEOCODER_USER_AGENT", "transit-guide/0.1")

    async def _get(self, path: str, params: dict[str, str]) -> Any:
        url = f"{(self.base_url or '').rstrip('/')}/{path}"
        headers = {"Accept": "application/json", "User-Agent": self.user_agent or ""}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s, transport=self.transport
            ) as client:
                resp = await client.get(url, params=params, headers=headers)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPError as exc:
            raise GeocodingError(f"Address lookup failed: {exc}") from exc
        except ValueError as exc:
            raise GeocodingError("Address lookup returned invalid JSON") from exc

    def _in_region(self, point: GeoPoint, components: Mapping[str, str]) -> bool:
        return self.region is None or self.region.contains(point, components)

    def _to_resolved(self, item: Mapping[str, Any]) -> ResolvedAddress | None:
        point = _point(item)
        if point is None:
            return None
        components = _components(item)
        if not self._in_region(point, components):
            return None
        place_id = item.get("place_id")
        return ResolvedAddress(
            formatted_address=str(item.get("display_name") or ""),
            location=point,
            place_id=str(place_id) if place_id is not None else None,
            components=components,
        )

    async def search(
        self, query: str, *, limit: int = 5
    ) -> tuple[AddressSuggestion, ...]:
        params = {
            "format": "json",
            "addressdetails": "1",
            "limit": str(limit),
            "q": query,
        }
        if self.country_codes:
            params["countrycodes"] = self.country_codes
        viewbox = self.region.viewbox_param() if self.region else None
        if viewbox:
            params["viewbox"] = viewbox
            params["bounded"] = "1"

        data = await self._get("search", params)
        if not isinstance(data, list):
            raise GeocodingError("Unexpected search response")

        out: list[AddressSuggestion] = []
        for item in data:
            resolved = self._to_resolved(item)
            if resolved is None or resolved.place_id is None:
                continue
            out.append(
                AddressSuggestion(
                    description=resolved.formatted_address,
                    place_id=resolved.place_id,
                    location=resolved.location,
                )
            )
        return tuple(out)

    async def resolve_place(self, place_id: str) -> ResolvedAddress | None:
        data = await self._get(
            "lookup",
            {"format": "json", "addressdetails": "1", "place_ids": place_id},
        )
        if not isinstance(data, list) or not data:
            return None
        return self._to_resolved(data[0])

    async def reverse(self, point: GeoPoint) -> ResolvedAddress | None:
        data = await self._get(
            "reverse",
            {
                "format": "json",
                "addressdetails": "1",
                "lat": str(point.lat),
                "lon": str(point.lon),
            },
        )
        if not isinstance(data, dict) or "error" in data:
            return None
        return self._to_resolved(data)
