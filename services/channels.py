"""Channel id classification helpers."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from models.records import Axis

STATION_ALLOW_LIST = ("GNSS1", "GNSS2", "GNSS3", "GNSS4", "GNSS5")
COORDINATE_CHANNELS = ("LAT01", "LAT02", "LAT05", "LON01", "LON02", "LON05")

_CHANNEL_SHAPE = re.compile(r"^[A-Z]{3}0[125]$")


def channel_axis(channel_id: str) -> Optional[Axis]:
    """Return the axis a channel reports, or ``None`` for inert channels."""
    for axis in Axis:
        if channel_id.startswith(axis.value):
            return axis
    return None


def is_valid_channel_id(channel_id: str) -> bool:
    return bool(_CHANNEL_SHAPE.fullmatch(channel_id))


def filter_channel_ids(channel_ids: Iterable[str]) -> List[str]:
    return [channel_id for channel_id in channel_ids if is_valid_channel_id(channel_id)]
