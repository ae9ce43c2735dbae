class PlanningError(Exception):
    """Base exception for trip planning failures."""


class UnknownStopError(PlanningError):
    """Raised when a stop id is not present in the schedule index."""

    def __init__(self, stop_id: str) -> None:
        super().__init__(f"Unknown stop: {stop_id}")
        self.stop_id = stop_id


class GeocodingError(PlanningError):
    """Raised when the geocoding provider fails or returns garbage."""
