"""Contract shared by all reading store backends."""

from __future__ import annotations

from typing import List, Protocol

from datastore.query import ReadingQuery
from models.records import Reading


class StoreError(RuntimeError):
    """Raised when the backing store cannot answer a query."""


class ReadingStore(Protocol):
    def fetch(self, query: ReadingQuery) -> List[Reading]:
        ...

    def distinct_station_ids(self) -> List[str]:
        ...

    def distinct_channel_ids(self, station_id: str) -> List[str]:
        ...

    def close(self) -> None:
        ...
