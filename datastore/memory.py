from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Iterable, List, Mapping, Optional

from datastore.base import StoreError
from datastore.query import ReadingQuery, SortOrder
from models.records import TIMESTAMP_COLUMN, Reading
from services.selector import select_latest

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid timestamp {value!r}")

    candidate = value.strip()
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    return _as_utc(datetime.fromisoformat(candidate))


class InMemoryReadingStore:
    """Reading store over a fixed list of rows, optionally loaded from JSON.

    The JSON fixture is a list of objects with ``gnss_id``, ``sensor_id``,
    ``value`` and ``timestamp`` keys plus any extra columns.
    """

    def __init__(
        self,
        readings: Iterable[Reading] = (),
        persistence_path: Optional[Path] = None,
    ) -> None:
        self.persistence_path = persistence_path
        self._lock = Lock()
        self._readings: List[Reading] = [self._normalize(reading) for reading in readings]
        if persistence_path:
            self._readings.extend(self._load_from_disk(persistence_path))

    def fetch(self, query: ReadingQuery) -> List[Reading]:
        with self._lock:
            rows = [reading for reading in self._readings if self._matches(query, reading)]

        if query.latest_only:
            rows = select_latest(rows)
            rows.sort(key=lambda reading: (reading.station_id, reading.channel_id))
        else:
            rows.sort(
                key=lambda reading: reading.timestamp,
                reverse=query.order is SortOrder.desc,
            )
        return rows

    def distinct_station_ids(self) -> List[str]:
        with self._lock:
            return sorted({reading.station_id for reading in self._readings})

    def distinct_channel_ids(self, station_id: str) -> List[str]:
        with self._lock:
            return sorted(
                {
                    reading.channel_id
                    for reading in self._readings
                    if reading.station_id == station_id
                }
            )

    def close(self) -> None:
        return None

    @staticmethod
    def _matches(query: ReadingQuery, reading: Reading) -> bool:
        if query.station_ids is not None and reading.station_id not in query.station_ids:
            return False
        if query.channel_ids is not None and reading.channel_id not in query.channel_ids:
            return False
        if query.start is not None and reading.timestamp < _as_utc(query.start):
            return False
        if query.end is not None and reading.timestamp > _as_utc(query.end):
            return False
        return True

    @staticmethod
    def _normalize(reading: Reading) -> Reading:
        return Reading(
            station_id=reading.station_id,
            channel_id=reading.channel_id,
            value=reading.value,
            timestamp=_as_utc(reading.timestamp),
            extra=dict(reading.extra),
        )

    @staticmethod
    def _load_from_disk(path: Path) -> List[Reading]:
        try:
            payload = json.loads(path.read_text() or "[]")
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Could not load readings from {path}") from exc

        readings: List[Reading] = []
        for row in payload:
            if not isinstance(row, Mapping):
                raise StoreError(f"Unexpected row in {path}: {row!r}")
            try:
                record = dict(row)
                record[TIMESTAMP_COLUMN] = _parse_timestamp(record.get(TIMESTAMP_COLUMN))
                readings.append(Reading.from_row(record))
            except (KeyError, ValueError) as exc:
                raise StoreError(f"Malformed row in {path}: {row!r}") from exc

        logger.info(
            "Loaded readings fixture",
            extra={"row_count": len(readings), "backend": "memory"},
        )
        return readings
