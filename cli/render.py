from __future__ import annotations

from typing import Any, Dict, Iterable, List

import typer

_ROW_COLUMNS = ("gnss_id", "sensor_id", "value", "timestamp")


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_items(items: Iterable[Any]) -> None:
    for item in items:
        typer.echo(f"  - {item}")


def render_ids(title: str, ids: List[str]) -> None:
    echo_heading(title)
    if ids:
        echo_items(ids)
    else:
        typer.echo("None found.")


def render_coordinates(coordinates: List[Dict[str, Any]]) -> None:
    echo_heading("Station Coordinates")
    if not coordinates:
        typer.echo("No stations with a complete fix.")
        return
    for coordinate in coordinates:
        typer.echo(
            f"{coordinate.get('gnss_id')}: "
            f"lat={coordinate.get('latitude'):.6f} lon={coordinate.get('longitude'):.6f}"
        )


def render_rows(title: str, rows: List[Dict[str, Any]]) -> None:
    echo_heading(title)
    if not rows:
        typer.echo("No readings.")
        return
    typer.echo(" | ".join(_ROW_COLUMNS))
    for row in rows:
        typer.echo(" | ".join(str(row.get(column, "")) for column in _ROW_COLUMNS))
