"""Immutable description of a reading lookup."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Tuple


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


@dataclass(frozen=True)
class ReadingQuery:
    """Filters and ordering for a single read against a :class:`ReadingStore`.

    ``None`` for a filter means "unrestricted". Bounds are inclusive. When
    ``latest_only`` is set the store returns a single row per
    (station, channel) pair, ordered by station then channel, and ``order``
    is ignored.
    """

    station_ids: Optional[Tuple[str, ...]] = None
    channel_ids: Optional[Tuple[str, ...]] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    latest_only: bool = False
    order: SortOrder = SortOrder.asc

    def for_stations(self, station_ids: Iterable[str]) -> "ReadingQuery":
        return replace(self, station_ids=tuple(station_ids))

    def for_channels(self, channel_ids: Iterable[str]) -> "ReadingQuery":
        return replace(self, channel_ids=tuple(channel_ids))

    def between(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> "ReadingQuery":
        return replace(self, start=start, end=end)

    def latest_per_channel(self) -> "ReadingQuery":
        return replace(self, latest_only=True)

    def ordered(self, order: SortOrder) -> "ReadingQuery":
        return replace(self, order=order)
