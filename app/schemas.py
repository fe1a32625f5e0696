"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from models.records import Coordinate, Reading


class GnssRow(BaseModel):
    """A raw row of the readings table; unknown columns are passed through."""

    model_config = ConfigDict(extra="allow")

    gnss_id: str
    sensor_id: str
    value: Any = None
    timestamp: datetime

    @classmethod
    def from_reading(cls, reading: Reading) -> "GnssRow":
        return cls.model_validate(reading.to_row())


class GnssCoordinate(BaseModel):
    """Decoded position of a station in decimal degrees."""

    gnss_id: str
    latitude: float = Field(..., description="Decimal degrees, negative south.")
    longitude: float = Field(..., description="Decimal degrees.")

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "GnssCoordinate":
        return cls(
            gnss_id=coordinate.station_id,
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
        )
