from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the GNSS station API."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def latest(self) -> List[Dict[str, Any]]:
        return self._get("/api/gnss5")

    def coordinates(self) -> List[Dict[str, Any]]:
        return self._get("/api/gnss-coords")

    def station_ids(self) -> List[str]:
        return self._get("/api/gnss_ids")

    def channel_ids(self, gnss_id: str) -> List[str]:
        return self._get(f"/api/sensors/{gnss_id}")

    def detail(
        self,
        gnss_id: str,
        sensor_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, str] = {"gnssId": gnss_id, "sensorId": sensor_id}
        if start is not None:
            params["startDate"] = start.isoformat()
        if end is not None:
            params["endDate"] = end.isoformat()
        return self._get("/api/gnss-detail", params=params)

    def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        try:
            response = self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.TransportError as exc:
            typer.secho(
                f"Could not reach {self._config.base_url}: {exc}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(code=1) from exc
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
