from __future__ import annotations

import os
from datetime import datetime
from functools import lru_cache
from zoneinfo import ZoneInfo

from src.adapters.geocoding.nominatim_geocoder import NominatimGeocoder
from src.adapters.persistence.local_gtfs_repository import LocalGtfsRepository
from src.app.services.address_lookup_service import AddressLookupService
from src.app.services.trip_planner_service import TripPlannerService
from src.domain.algorithms.gtfs_time import minutes_since_midnight


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@lru_cache(maxsize=1)
def get_trip_planner_service() -> TripPlannerService:
    # Cached: the schedule index is built once per process and then shared.
    service = TripPlannerService(gtfs_repository=LocalGtfsRepository())

    # Allow tuning via env without changing code.
    if os.getenv("MAX_ALTERNATIVES"):
        service.max_alternatives = int(os.environ["MAX_ALTERNATIVES"])
    service.proximity_alighting = _env_bool("PROXIMITY_ALIGHTING", True)

    return service


@lru_cache(maxsize=1)
def get_geocoder() -> NominatimGeocoder:
    return NominatimGeocoder()


def get_address_lookup_service() -> AddressLookupService:
    # One per request: last-request-wins only makes sense within one caller.
    return AddressLookupService(
        geocoder=get_geocoder(), planner=get_trip_planner_service()
    )


def current_service_minutes() -> int:
    """Minutes since local midnight in the feed timezone (GTFS_TIMEZONE)."""

    tz_name = (os.getenv("GTFS_TIMEZONE") or "").strip()
    now = datetime.now(ZoneInfo(tz_name)) if tz_name else datetime.now()
    return minutes_since_midnight(now)
