from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import pytest
import typer
from typer.testing import CliRunner

from cli.app import app


class StubClient:
    def __init__(self, config) -> None:
        self.config = config
        self.detail_calls: List[tuple] = []
        self.closed = False

    def latest(self) -> List[Dict[str, Any]]:
        return [
            {
                "gnss_id": "GNSS1",
                "sensor_id": "LAT01",
                "value": "1230.0000",
                "timestamp": "2024-01-01T00:00:00Z",
            }
        ]

    def coordinates(self) -> List[Dict[str, Any]]:
        return [{"gnss_id": "GNSS1", "latitude": -12.5, "longitude": 8.5}]

    def station_ids(self) -> List[str]:
        return ["GNSS1", "GNSS2"]

    def channel_ids(self, gnss_id: str) -> List[str]:
        return ["LAT01", "LON01"] if gnss_id == "GNSS1" else []

    def detail(
        self,
        gnss_id: str,
        sensor_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        self.detail_calls.append((gnss_id, sensor_id, start, end))
        return []

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def stub(monkeypatch) -> StubClient:
    stub = StubClient(config=None)

    def factory(config):
        stub.config = config
        return stub

    monkeypatch.setattr("cli.app.ApiClient", factory)
    return stub


def test_coords_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["coords"])

    assert result.exit_code == 0
    assert "GNSS1: lat=-12.500000 lon=8.500000" in result.stdout
    assert stub.closed is True


def test_stations_command_uses_base_url(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["--base-url", "http://gnss.example/", "stations"])

    assert result.exit_code == 0
    assert "  - GNSS2" in result.stdout
    assert stub.config.base_url == "http://gnss.example"


def test_sensors_command_with_no_results(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["sensors", "GNSS9"])

    assert result.exit_code == 0
    assert "Sensors for GNSS9" in result.stdout
    assert "None found." in result.stdout


def test_latest_command_renders_rows(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["latest"])

    assert result.exit_code == 0
    assert "GNSS1 | LAT01 | 1230.0000" in result.stdout


def test_detail_command_passes_bounds(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(
        app,
        ["detail", "GNSS1", "LAT01", "--start", "2024-01-01T00:00:00", "--end", "2024-01-02"],
    )

    assert result.exit_code == 0
    assert "No readings." in result.stdout
    assert stub.detail_calls == [
        ("GNSS1", "LAT01", datetime(2024, 1, 1), datetime(2024, 1, 2))
    ]


def test_api_client_reports_server_error(monkeypatch) -> None:
    import httpx

    from cli.client import ApiClient
    from cli.config import CLIConfig

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="Error fetching coordinates")

    client = ApiClient(CLIConfig(base_url="http://testserver"))
    client._client = httpx.Client(
        base_url="http://testserver", transport=httpx.MockTransport(handler)
    )
    try:
        with pytest.raises(typer.Exit) as excinfo:
            client.coordinates()
        assert excinfo.value.exit_code == 1
    finally:
        client.close()


def test_api_client_builds_detail_params() -> None:
    import httpx

    from cli.client import ApiClient
    from cli.config import CLIConfig

    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    client = ApiClient(CLIConfig(base_url="http://testserver"))
    client._client = httpx.Client(
        base_url="http://testserver", transport=httpx.MockTransport(handler)
    )
    try:
        client.detail("GNSS1", "LAT01", start=datetime(2024, 1, 1))
    finally:
        client.close()

    params = dict(seen[0].url.params)
    assert seen[0].url.path == "/api/gnss-detail"
    assert params == {
        "gnssId": "GNSS1",
        "sensorId": "LAT01",
        "startDate": "2024-01-01T00:00:00",
    }
