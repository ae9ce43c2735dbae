from .geo import BoundingBox, GeoPoint
from .geocoding import AddressMatch, AddressSuggestion, ResolvedAddress
from .gtfs import GtfsFeed, GtfsRoute, GtfsTrip, ScheduleIndex, StopRow, StopTime
from .plan import (
    CandidateTrip,
    DirectPlan,
    NearestStop,
    PlanError,
    PlanResult,
    TransferItinerary,
    TransferPlan,
    TripPlan,
)
from .stop import Stop

__all__ = [
    "AddressMatch",
    "AddressSuggestion",
    "BoundingBox",
    "CandidateTrip",
    "DirectPlan",
    "GeoPoint",
    "GtfsFeed",
    "GtfsRoute",
    "GtfsTrip",
    "NearestStop",
    "PlanError",
    "PlanResult",
    "ResolvedAddress",
    "ScheduleIndex",
    "Stop",
    "StopRow",
    "StopTime",
    "TransferItinerary",
    "TransferPlan",
    "TripPlan",
]
