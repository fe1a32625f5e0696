from __future__ import annotations

from datetime import datetime, timedelta, timezone

from models.records import Reading
from services.selector import select_latest

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _reading(station_id: str, channel_id: str, value: str, minutes: int) -> Reading:
    return Reading(
        station_id=station_id,
        channel_id=channel_id,
        value=value,
        timestamp=T0 + timedelta(minutes=minutes),
    )


def test_select_latest_keeps_one_reading_per_pair() -> None:
    readings = [
        _reading("GNSS1", "LAT01", "old", 0),
        _reading("GNSS1", "LAT01", "new", 5),
        _reading("GNSS1", "LON01", "lon", 1),
        _reading("GNSS2", "LAT01", "other", 2),
        _reading("GNSS1", "LAT01", "middle", 3),
    ]

    latest = select_latest(readings)

    assert [(r.station_id, r.channel_id, r.value) for r in latest] == [
        ("GNSS1", "LAT01", "new"),
        ("GNSS1", "LON01", "lon"),
        ("GNSS2", "LAT01", "other"),
    ]


def test_select_latest_tie_keeps_first_seen() -> None:
    readings = [
        _reading("GNSS1", "LAT01", "first", 0),
        _reading("GNSS1", "LAT01", "second", 0),
    ]

    assert [r.value for r in select_latest(readings)] == ["first"]


def test_select_latest_is_idempotent() -> None:
    readings = [
        _reading("GNSS1", "LAT01", "a", 1),
        _reading("GNSS1", "LAT01", "b", 2),
        _reading("GNSS3", "LON05", "c", 0),
    ]

    once = select_latest(readings)

    assert select_latest(once) == once
    assert select_latest(readings) == once


def test_select_latest_empty() -> None:
    assert select_latest([]) == []
