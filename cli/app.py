from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_chart, render_current, render_import, render_stats, render_table


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the lab telemetry dashboard service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1, message="CLI state is uninitialized.")
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Dashboard API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
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
    temperature: float = typer.Argument(..., help="Temperature in °C."),
    humidity: float = typer.Argument(..., help="Relative humidity in %."),
    time_label: Optional[str] = typer.Option(None, "--time", "-t", help="HH:MM label for the reading."),
    timestamp: Optional[str] = typer.Option(None, "--timestamp", help="ISO-8601 capture time."),
) -> None:
    """Append one reading to the dashboard history."""
    state = _get_state(ctx)
    history_size = state.client.push_reading(
        temperature, humidity, time_label=time_label, timestamp=timestamp
    )
    typer.secho(f"Reading accepted. history_size={history_size}", fg=typer.colors.GREEN)


@app.command("import")
def import_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to CSV file."),
) -> None:
    """Upload a CSV export of readings."""
    state = _get_state(ctx)
    typer.echo(f"Uploading {file} to {state.config.base_url} ...")
    render_import(state.client.import_csv(file))


@app.command("disconnect")
def disconnect_command(ctx: typer.Context) -> None:
    """Signal that the data source has no data."""
    state = _get_state(ctx)
    state.client.disconnect()
    typer.secho("Data source marked as disconnected.", fg=typer.colors.YELLOW)


@app.command("current")
def current_command(ctx: typer.Context) -> None:
    """Show the latest reading and connection state."""
    state = _get_state(ctx)
    render_current(state.client.get_current())


@app.command("table")
def table_command(
    ctx: typer.Context,
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Maximum rows to show."),
) -> None:
    """Show classified ten-minute samples, newest first."""
    state = _get_state(ctx)
    render_table(state.client.get_table(limit))


@app.command("stats")
def stats_command(
    ctx: typer.Context,
    window: Optional[int] = typer.Option(None, "--window", "-w", min=1, help="Raw readings to average."),
) -> None:
    """Show rolling temperature and humidity averages."""
    state = _get_state(ctx)
    render_stats(state.client.get_stats(window))


@app.command("chart")
def chart_command(ctx: typer.Context) -> None:
    """List the ten-minute samples used for the trend chart."""
    state = _get_state(ctx)
    render_chart(state.client.get_chart())
