from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_coordinates, render_ids, render_rows


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for querying the GNSS station API.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="API base URL (defaults to API_BASE_URL env or http://localhost:8080).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Request timeout in seconds.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("latest")
def latest_command(ctx: typer.Context) -> None:
    """Show the latest reading per channel for stations GNSS1-GNSS5."""
    state = _get_state(ctx)
    render_rows("Latest Readings", state.client.latest())


@app.command("coords")
def coords_command(ctx: typer.Context) -> None:
    """Show decoded station coordinates."""
    state = _get_state(ctx)
    render_coordinates(state.client.coordinates())


@app.command("stations")
def stations_command(ctx: typer.Context) -> None:
    """List known station identifiers."""
    state = _get_state(ctx)
    render_ids("Stations", state.client.station_ids())


@app.command("sensors")
def sensors_command(
    ctx: typer.Context,
    gnss_id: str = typer.Argument(..., help="Station identifier, e.g. GNSS1."),
) -> None:
    """List sensor channels reported by a station."""
    state = _get_state(ctx)
    render_ids(f"Sensors for {gnss_id}", state.client.channel_ids(gnss_id))


@app.command("detail")
def detail_command(
    ctx: typer.Context,
    gnss_id: str = typer.Argument(..., help="Station identifier, e.g. GNSS1."),
    sensor_id: str = typer.Argument(..., help="Channel identifier, e.g. LAT01."),
    start: Optional[datetime] = typer.Option(
        None,
        "--start",
        help="Earliest timestamp to include.",
    ),
    end: Optional[datetime] = typer.Option(
        None,
        "--end",
        help="Latest timestamp to include.",
    ),
) -> None:
    """Show all readings of one channel, oldest first."""
    state = _get_state(ctx)
    rows = state.client.detail(gnss_id, sensor_id, start=start, end=end)
    render_rows(f"{gnss_id} / {sensor_id}", rows)
