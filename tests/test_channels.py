from __future__ import annotations

import pytest

from models.records import Axis
from services.channels import channel_axis, filter_channel_ids, is_valid_channel_id


@pytest.mark.parametrize("channel_id", ["LAT01", "LON02", "FOO05", "ABC01"])
def test_shape_filter_accepts(channel_id: str) -> None:
    assert is_valid_channel_id(channel_id)


@pytest.mark.parametrize(
    "channel_id",
    ["lat01", "LAT00", "LATO1", "LAT03", "FOO3", "LAT011", "LA01", "", "LAT01\n"],
)
def test_shape_filter_rejects(channel_id: str) -> None:
    assert not is_valid_channel_id(channel_id)


def test_filter_channel_ids_preserves_order_and_drops_mismatches() -> None:
    assert filter_channel_ids(["LON05", "TEMP", "LAT01", "lat02", "ALT02"]) == [
        "LON05",
        "LAT01",
        "ALT02",
    ]


def test_channel_axis_by_prefix() -> None:
    assert channel_axis("LAT05") is Axis.LAT
    assert channel_axis("LON01") is Axis.LON
    assert channel_axis("LONGITUDE") is Axis.LON
    assert channel_axis("ALT01") is None
    assert channel_axis("lat01") is None
