"""Decoding of packed degrees-minutes sensor values into decimal degrees."""

from __future__ import annotations

import math
import re
from typing import Any, Optional

from models.records import Axis

_NUMERAL = re.compile(r"([0-9]+\.[0-9]+)")


def decode_angle(raw: Any, axis: Axis) -> Optional[float]:
    """Convert a raw ``DDDMM.mmmm`` reading to signed decimal degrees.

    The first unsigned ``digits.digits`` numeral embedded in ``raw`` is read as
    whole degrees above the hundreds place and minutes below it. Returns
    ``None`` when ``raw`` is not a string or carries no such numeral.

    Latitude values are negated: this deployment's receivers report southern
    latitudes without a hemisphere marker. Longitude is returned as decoded.
    No range check is applied to either axis.
    """
    if not raw or not isinstance(raw, str):
        return None

    match = _NUMERAL.search(raw)
    if match is None:
        return None

    number = float(match.group(1))
    if not math.isfinite(number):
        return None

    degrees = math.floor(number / 100)
    minutes = number - degrees * 100
    decimal = degrees + minutes / 60

    return -decimal if axis is Axis.LAT else decimal
