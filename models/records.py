"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping


STATION_COLUMN = "gnss_id"
CHANNEL_COLUMN = "sensor_id"
VALUE_COLUMN = "value"
TIMESTAMP_COLUMN = "timestamp"


class Axis(str, Enum):
    """Coordinate axis a channel reports; values double as channel id prefixes."""

    LAT = "LAT"
    LON = "LON"


@dataclass(frozen=True, slots=True)
class Reading:
    """One sample from one channel on one station.

    ``value`` is kept exactly as the store returned it. Any table columns
    beyond the four known ones are carried in ``extra`` so raw rows can be
    passed through unchanged.
    """

    station_id: str
    channel_id: str
    value: Any
    timestamp: datetime
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Reading":
        extra = {
            key: value
            for key, value in row.items()
            if key not in (STATION_COLUMN, CHANNEL_COLUMN, VALUE_COLUMN, TIMESTAMP_COLUMN)
        }
        return cls(
            station_id=row[STATION_COLUMN],
            channel_id=row[CHANNEL_COLUMN],
            value=row.get(VALUE_COLUMN),
            timestamp=row[TIMESTAMP_COLUMN],
            extra=extra,
        )

    def to_row(self) -> Dict[str, Any]:
        row: Dict[str, Any] = dict(self.extra)
        row.update(
            {
                STATION_COLUMN: self.station_id,
                CHANNEL_COLUMN: self.channel_id,
                VALUE_COLUMN: self.value,
                TIMESTAMP_COLUMN: self.timestamp,
            }
        )
        return row


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Decoded position of a single station in decimal degrees."""

    station_id: str
    latitude: float
    longitude: float
