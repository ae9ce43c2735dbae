from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from src.app.services.address_lookup_service import AddressLookupService
from src.app.services.trip_planner_service import TripPlannerService
from src.domain.models import AddressSuggestion, GeoPoint, ResolvedAddress
from src.domain.models.gtfs import GtfsFeed


@dataclass(slots=True)
class FakeGtfsRepository:
    feed: GtfsFeed

    def load_feed(self) -> GtfsFeed:
        return self.feed


@dataclass(slots=True)
class FakeGeocoder:
    suggestions: dict[str, tuple[AddressSuggestion, ...]] = field(default_factory=dict)
    places: dict[str, ResolvedAddress] = field(default_factory=dict)
    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    searches: list[str] = field(default_factory=list)

    async def search(
        self, query: str, *, limit: int = 5
    ) -> tuple[AddressSuggestion, ...]:
        self.searches.append(query)
        gate = self.gates.get(query)
        if gate is not None:
            await gate.wait()
        return self.suggestions.get(query, ())[:limit]

    async def resolve_place(self, place_id: str) -> ResolvedAddress | None:
        return self.places.get(place_id)

    async def reverse(self, point: GeoPoint) -> ResolvedAddress | None:
        return None


@pytest.fixture
def planner(make_feed) -> TripPlannerService:
    feed = make_feed(
        {"A": (0.0, 0.0), "B": (0.0, 0.02)},
        [("t1", None, [("A", "08:00:00", "08:00:00", 1), ("B", "08:10:00", "08:10:00", 2)])],
    )
    return TripPlannerService(gtfs_repository=FakeGtfsRepository(feed))


def _suggestion(name: str, location: GeoPoint | None = None) -> AddressSuggestion:
    return AddressSuggestion(description=name, place_id=f"p-{name}", location=location)


@pytest.mark.unit
@pytest.mark.anyio
async def test_suggest_blank_query_skips_geocoder(planner) -> None:
    geocoder = FakeGeocoder()
    svc = AddressLookupService(geocoder=geocoder, planner=planner)

    assert await svc.suggest("   ") == ()
    assert geocoder.searches == []


@pytest.mark.unit
@pytest.mark.anyio
async def test_suggest_returns_results(planner) -> None:
    geocoder = FakeGeocoder(suggestions={"main": (_suggestion("Main St"),)})
    svc = AddressLookupService(geocoder=geocoder, planner=planner)

    results = await svc.suggest("main")

    assert results == (_suggestion("Main St"),)
    assert svc.latest_suggestions == results


@pytest.mark.unit
@pytest.mark.anyio
async def test_suggest_discards_stale_responses(planner) -> None:
    slow_gate = asyncio.Event()
    geocoder = FakeGeocoder(
        suggestions={
            "ma": (_suggestion("Maple"),),
            "main": (_suggestion("Main St"),),
        },
        gates={"ma": slow_gate},
    )
    svc = AddressLookupService(geocoder=geocoder, planner=planner)

    slow = asyncio.create_task(svc.suggest("ma"))
    await asyncio.sleep(0)
    fast = await svc.suggest("main")
    slow_gate.set()
    stale = await slow

    assert fast == (_suggestion("Main St"),)
    assert stale is None
    assert svc.latest_suggestions == (_suggestion("Main St"),)


@pytest.mark.unit
@pytest.mark.anyio
async def test_resolve_place_id_snaps_to_nearest_stop(planner) -> None:
    geocoder = FakeGeocoder(
        places={
            "p1": ResolvedAddress(
                formatted_address="1 Main St",
                location=GeoPoint(lat=0.0, lon=0.019),
                place_id="p1",
            )
        }
    )
    svc = AddressLookupService(geocoder=geocoder, planner=planner)

    match = await svc.resolve(place_id="p1")

    assert match is not None
    assert match.address == "1 Main St"
    assert match.nearest is not None
    assert match.nearest.stop.id == "B"


@pytest.mark.unit
@pytest.mark.anyio
async def test_resolve_prefers_stops_that_reach_destination(planner) -> None:
    geocoder = FakeGeocoder(
        places={
            "p1": ResolvedAddress(
                formatted_address="Near B",
                location=GeoPoint(lat=0.0, lon=0.019),
            )
        }
    )
    svc = AddressLookupService(geocoder=geocoder, planner=planner)

    match = await svc.resolve(place_id="p1", destination_stop_id="B")

    assert match is not None and match.nearest is not None
    assert match.nearest.stop.id == "A"


@pytest.mark.unit
@pytest.mark.anyio
async def test_resolve_query_uses_top_hit_location(planner) -> None:
    geocoder = FakeGeocoder(
        suggestions={
            "station": (
                _suggestion("Station Rd", GeoPoint(lat=0.0, lon=0.001)),
                _suggestion("Station Ave", GeoPoint(lat=0.0, lon=0.02)),
            )
        }
    )
    svc = AddressLookupService(geocoder=geocoder, planner=planner)

    match = await svc.resolve(query="station")

    assert match is not None
    assert match.address == "Station Rd"
    assert match.nearest is not None and match.nearest.stop.id == "A"


@pytest.mark.unit
@pytest.mark.anyio
async def test_resolve_query_without_location_looks_up_place(planner) -> None:
    geocoder = FakeGeocoder(
        suggestions={"elm": (_suggestion("Elm"),)},
        places={
            "p-Elm": ResolvedAddress(
                formatted_address="Elm St, Town",
                location=GeoPoint(lat=0.0, lon=0.02),
            )
        },
    )
    svc = AddressLookupService(geocoder=geocoder, planner=planner)

    match = await svc.resolve(query="elm")

    assert match is not None
    assert match.address == "Elm St, Town"


@pytest.mark.unit
@pytest.mark.anyio
async def test_resolve_nothing_found(planner) -> None:
    svc = AddressLookupService(geocoder=FakeGeocoder(), planner=planner)

    assert await svc.resolve(query="nowhere") is None
    assert await svc.resolve(place_id="missing") is None
    assert await svc.resolve() is None


@pytest.mark.unit
@pytest.mark.anyio
async def test_resolve_without_stops_has_no_nearest(make_feed) -> None:
    planner = TripPlannerService(gtfs_repository=FakeGtfsRepository(make_feed({}, [])))
    geocoder = FakeGeocoder(
        places={
            "p1": ResolvedAddress(
                formatted_address="Somewhere", location=GeoPoint(lat=1.0, lon=1.0)
            )
        }
    )
    svc = AddressLookupService(geocoder=geocoder, planner=planner)

    match = await svc.resolve(place_id="p1")

    assert match is not None
    assert match.nearest is None
