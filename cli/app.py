from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_chart_data


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the sensor chart service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each HTTP request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("push")
def push_command(
    ctx: typer.Context,
    inside: float = typer.Option(..., "--inside", "-i", help="Indoor temperature, °C."),
    outside: float = typer.Option(..., "--outside", "-o", help="Outdoor temperature, °C."),
    humidity: float = typer.Option(..., "--humidity", "-H", help="Relative humidity, %."),
) -> None:
    """Store a reading stamped with the server's current time."""
    state = _get_state(ctx)
    message = state.client.push_reading(inside=inside, outside=outside, humidity=humidity)
    typer.secho(message, fg=typer.colors.GREEN)


@app.command("dump")
def dump_command(ctx: typer.Context) -> None:
    """Print retained raw values, one series per line."""
    state = _get_state(ctx)
    typer.echo(state.client.dump())


@app.command("last-update")
def last_update_command(ctx: typer.Context) -> None:
    """Show how long ago the newest reading was stored."""
    state = _get_state(ctx)
    typer.echo(state.client.last_update())


@app.command("reset")
def reset_command(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Drop every stored reading."""
    state = _get_state(ctx)
    if not yes:
        typer.confirm(f"Drop all readings on {state.config.base_url}?", abort=True)
    typer.echo(state.client.reset())


@app.command("chart-data")
def chart_data_command(ctx: typer.Context) -> None:
    """Show the aligned series and axis bounds behind the chart."""
    state = _get_state(ctx)
    payload = state.client.chart_data()
    if payload is None:
        typer.echo("No data available")
        return
    render_chart_data(payload)
