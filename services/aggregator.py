"""Aggregation of decoded channel readings into station coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List

from models.records import Axis, Coordinate, Reading
from services.channels import channel_axis
from services.decoder import decode_angle


@dataclass
class _PartialFix:
    latitude: float | None = None
    longitude: float | None = None

    def is_complete(self) -> bool:
        return (
            self.latitude is not None
            and self.longitude is not None
            and math.isfinite(self.latitude)
            and math.isfinite(self.longitude)
        )


class CoordinateAggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def aggregate(self, readings: Iterable[Reading]) -> List[Coordinate]:
        fixes: Dict[str, _PartialFix] = {}

        for reading in readings:
            fix = fixes.setdefault(reading.station_id, _PartialFix())
            axis = channel_axis(reading.channel_id)
            if axis is None:
                continue

            decoded = decode_angle(reading.value, axis)
            if decoded is None:
                continue

            # Last decodable channel per axis wins.
            if axis is Axis.LAT:
                fix.latitude = decoded
            else:
                fix.longitude = decoded

        return [
            Coordinate(station_id=station_id, latitude=fix.latitude, longitude=fix.longitude)
            for station_id, fix in fixes.items()
            if fix.is_complete()
        ]
