from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Stop:
    """A boarding location from stops.txt with a validated position."""

    id: str
    name: str
    location: GeoPoint
    # Rider-facing stop number, when the agency publishes one.
    code: str | None = None
