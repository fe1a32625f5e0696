"""Latest-reading selection per (station, channel) pair."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from models.records import Reading


def select_latest(readings: Iterable[Reading]) -> List[Reading]:
    """Keep only the most recent reading for each (station, channel) pair.

    On equal timestamps the reading seen first wins, so the result is stable
    for a stable input order. Survivors keep the order in which their group
    was first encountered.
    """
    latest: Dict[Tuple[str, str], Reading] = {}
    for reading in readings:
        key = (reading.station_id, reading.channel_id)
        current = latest.get(key)
        if current is None or reading.timestamp > current.timestamp:
            latest[key] = reading
    return list(latest.values())
