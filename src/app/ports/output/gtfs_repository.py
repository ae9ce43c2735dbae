from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models.gtfs import GtfsFeed


class IGtfsRepository(ABC):
    """Source of the static timetable.

    Implementations return raw rows; cleaning and indexing happen in
    build_index(). stops and stop_times are required, routes and trips may
    come back empty.
    """

    @abstractmethod
    def load_feed(self) -> GtfsFeed:
        raise NotImplementedError
