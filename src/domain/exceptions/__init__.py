from .planning import GeocodingError, PlanningError, UnknownStopError

__all__ = [
    "GeocodingError",
    "PlanningError",
    "UnknownStopError",
]
