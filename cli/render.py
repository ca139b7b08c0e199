from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _fmt(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"{value:0.2f}"
    return "-"


def render_chart_data(payload: Dict[str, Any]) -> None:
    labels = payload.get("labels") or []
    echo_heading("Axis Bounds")
    echo_key_values(
        [
            ("temperature", f"{_fmt(payload.get('temp_axis_min'))} .. {_fmt(payload.get('temp_axis_max'))}"),
            ("humidity", f"{_fmt(payload.get('humidity_axis_min'))} .. {_fmt(payload.get('humidity_axis_max'))}"),
            ("points", len(labels)),
        ]
    )

    typer.echo()
    echo_heading("Series")
    typer.echo(f"{'time':>8}  {'inside':>7}  {'outside':>7}  {'humidity':>8}")
    rows = zip(
        labels,
        payload.get("series_inside") or [],
        payload.get("series_outside") or [],
        payload.get("series_humidity") or [],
    )
    for label, inside, outside, humidity in rows:
        typer.echo(f"{label:>8}  {_fmt(inside):>7}  {_fmt(outside):>7}  {_fmt(humidity):>8}")
