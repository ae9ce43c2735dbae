from __future__ import annotations

import csv
import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from src.app.ports.output import IGtfsRepository
from src.domain.models.gtfs import GtfsFeed, GtfsRoute, GtfsTrip, StopRow, StopTime

logger = logging.getLogger(__name__)


def _to_float(raw: str | None) -> float:
    try:
        return float((raw or "").strip())
    except ValueError:
        return math.nan


def _text(row: dict[str, str], key: str) -> str:
    return (row.get(key) or "").strip()


@dataclass(slots=True)
class LocalGtfsRepository(IGtfsRepository):
    """Loads a GTFS feed from a directory of .txt files.

    Env vars:
      - GTFS_PATH: path to directory containing stops.txt, routes.txt,
        trips.txt and stop_times.txt

    routes.txt and trips.txt are optional; a feed without them loads but
    yields no itineraries.
    """

    base_path: str | Path | None = None

    def _base(self) -> Path:
        value = self.base_path or os.getenv("GTFS_PATH") or "data/gtfs"
        return Path(value)

    def _rows(self, name: str, *, required: bool) -> Iterator[dict[str, str]]:
        path = self._base() / name
        if not path.exists():
            if required:
                raise FileNotFoundError(f"GTFS table not found: {path}")
            logger.warning("Optional GTFS table missing: %s", path)
            return
        # utf-8-sig: many agencies export with a BOM on the header row.
        with path.open("r", encoding="utf-8-sig", newline="") as fp:
            yield from csv.DictReader(fp)

    def load_feed(self) -> GtfsFeed:
        routes: list[GtfsRoute] = []
        for row in self._rows("routes.txt", required=False):
            route_id = _text(row, "route_id")
            if not route_id:
                continue
            routes.append(
                GtfsRoute(
                    route_id=route_id,
                    short_name=_text(row, "route_short_name") or None,
                    long_name=_text(row, "route_long_name") or None,
                )
            )

        trips: list[GtfsTrip] = []
        for row in self._rows("trips.txt", required=False):
            trip_id = _text(row, "trip_id")
            if not trip_id:
                continue
            trips.append(
                GtfsTrip(
                    trip_id=trip_id,
                    route_id=_text(row, "route_id") or None,
                    headsign=_text(row, "trip_headsign") or None,
                    short_name=_text(row, "trip_short_name") or None,
                )
            )

        stops: list[StopRow] = []
        for row in self._rows("stops.txt", required=True):
            stop_id = _text(row, "stop_id")
            if not stop_id:
                continue
            stops.append(
                StopRow(
                    stop_id=stop_id,
                    code=_text(row, "stop_code") or None,
                    name=_text(row, "stop_name") or stop_id,
                    lat=_to_float(row.get("stop_lat")),
                    lon=_to_float(row.get("stop_lon")),
                )
            )

        stop_times: list[StopTime] = []
        skipped = 0
        for row in self._rows("stop_times.txt", required=True):
            trip_id = _text(row, "trip_id")
            stop_id = _text(row, "stop_id")
            if not trip_id or not stop_id:
                skipped += 1
                continue
            stop_times.append(
                StopTime(
                    trip_id=trip_id,
                    stop_id=stop_id,
                    arrival_time=_text(row, "arrival_time"),
                    departure_time=_text(row, "departure_time"),
                    stop_sequence=_to_float(row.get("stop_sequence")),
                )
            )
        if skipped:
            logger.warning("Skipped %d stop_times rows without trip/stop id", skipped)

        logger.info(
            "Loaded GTFS feed from %s: %d stops, %d routes, %d trips, %d stop_times",
            self._base(),
            len(stops),
            len(routes),
            len(trips),
            len(stop_times),
        )
        return GtfsFeed(
            stops=tuple(stops),
            routes=tuple(routes),
            trips=tuple(trips),
            stop_times=tuple(stop_times),
        )
