from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Literal, Union

from src.domain.algorithms.gtfs_time import time_to_minutes

from .gtfs import GtfsRoute, GtfsTrip
from .stop import Stop

NO_MORE_DEPARTURES_NOTE = "No more departures today. Showing the next available trip."


@dataclass(frozen=True, slots=True)
class CandidateTrip:
    """One ride on a single trip between a boarding and an alighting stop.

    Holds references into the schedule index, never copies.
    """

    trip: GtfsTrip
    route: GtfsRoute | None
    board_stop: Stop
    alight_stop: Stop
    board_time: str
    alight_time: str
    board_sequence: float
    alight_sequence: float

    @property
    def board_minutes(self) -> float:
        return time_to_minutes(self.board_time)

    @property
    def alight_minutes(self) -> float:
        return time_to_minutes(self.alight_time)


@dataclass(frozen=True, slots=True)
class TransferPlan:
    first_leg: CandidateTrip
    second_leg: CandidateTrip
    transfer_stop: Stop
    layover_minutes: float
    total_minutes: float


@dataclass(frozen=True, slots=True)
class PlanError:
    kind: ClassVar[Literal["error"]] = "error"

    message: str


@dataclass(frozen=True, slots=True)
class DirectPlan:
    kind: ClassVar[Literal["direct"]] = "direct"

    next_trip: CandidateTrip
    alternatives: tuple[CandidateTrip, ...] = field(default_factory=tuple)
    service_note: str | None = None


@dataclass(frozen=True, slots=True)
class TransferItinerary:
    kind: ClassVar[Literal["transfer"]] = "transfer"

    next_transfer: TransferPlan
    alternatives: tuple[TransferPlan, ...] = field(default_factory=tuple)
    service_note: str | None = None


PlanResult = Union[PlanError, DirectPlan, TransferItinerary]


@dataclass(frozen=True, slots=True)
class NearestStop:
    stop: Stop
    distance_km: float


@dataclass(frozen=True, slots=True)
class TripPlan:
    """A plan query answer: the resolved endpoints and the search outcome.

    Distances are only set for endpoints given as coordinates.
    """

    origin: Stop | None
    destination: Stop | None
    result: PlanResult
    origin_distance_km: float | None = None
    destination_distance_km: float | None = None
