"""Read operations over the GNSS reading store."""

from __future__ import annotations

import logging
from datetime import datetime
from functools import lru_cache
from typing import List, Optional

from datastore.base import ReadingStore
from datastore.factory import build_default_store
from datastore.query import ReadingQuery, SortOrder
from models.records import Coordinate, Reading
from services.aggregator import CoordinateAggregator
from services.channels import COORDINATE_CHANNELS, STATION_ALLOW_LIST, filter_channel_ids

logger = logging.getLogger(__name__)


class GnssQueryService:
    """Coordinates store lookups, coordinate decoding and channel filtering.

    Every method issues its own store query; nothing is cached between calls.
    Store failures propagate as :class:`datastore.base.StoreError`.
    """

    def __init__(self, store: ReadingStore, aggregator: CoordinateAggregator) -> None:
        self.store = store
        self.aggregator = aggregator

    def latest_snapshot(self) -> List[Reading]:
        """Latest reading per (station, channel) for the allow-listed stations."""
        query = ReadingQuery().for_stations(STATION_ALLOW_LIST).latest_per_channel()
        readings = self.store.fetch(query)
        logger.debug("Fetched latest snapshot", extra={"row_count": len(readings)})
        return readings

    def coordinates(self) -> List[Coordinate]:
        """Decimal-degree position of every station with a complete latest fix."""
        query = ReadingQuery().for_channels(COORDINATE_CHANNELS).latest_per_channel()
        readings = self.store.fetch(query)
        coordinates = self.aggregator.aggregate(readings)
        logger.debug(
            "Aggregated coordinates from %d readings",
            len(readings),
            extra={"row_count": len(coordinates)},
        )
        return coordinates

    def station_ids(self) -> List[str]:
        return self.store.distinct_station_ids()

    def channel_ids(self, station_id: str) -> List[str]:
        channel_ids = filter_channel_ids(self.store.distinct_channel_ids(station_id))
        logger.debug(
            "Fetched channel ids",
            extra={"station_id": station_id, "row_count": len(channel_ids)},
        )
        return channel_ids

    def detail(
        self,
        station_id: str,
        channel_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Reading]:
        """All readings of one channel, ascending, within the inclusive bounds."""
        query = (
            ReadingQuery()
            .for_stations([station_id])
            .for_channels([channel_id])
            .between(start, end)
            .ordered(SortOrder.asc)
        )
        readings = self.store.fetch(query)
        logger.debug(
            "Fetched channel detail",
            extra={
                "station_id": station_id,
                "channel_id": channel_id,
                "start": start,
                "end": end,
                "row_count": len(readings),
            },
        )
        return readings

    def shutdown(self) -> None:
        """Release the store's connections during application shutdown."""
        self.store.close()


@lru_cache
def build_default_service() -> GnssQueryService:
    """Factory that wires the service with the configured store."""
    return GnssQueryService(store=build_default_store(), aggregator=CoordinateAggregator())
