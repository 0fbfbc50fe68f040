from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import typer

_STATUS_COLORS = {
    "NORMAL": typer.colors.GREEN,
    "CAUTION": typer.colors.YELLOW,
    "WARNING": typer.colors.RED,
}


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _fmt(value: Any, suffix: str = "") -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:.1f}{suffix}"
    return f"{value}{suffix}"


def render_current(payload: Optional[Dict[str, Any]]) -> None:
    echo_heading("Current Reading")
    if not payload:
        typer.echo("No data available.")
        return
    reading = payload.get("reading") or {}
    echo_key_values(
        [
            ("time", reading.get("time_label")),
            ("temperature", _fmt(reading.get("temperature"), "°C")),
            ("humidity", _fmt(reading.get("humidity"), "%")),
            ("connected", payload.get("connected")),
            ("last_update", payload.get("last_update")),
        ]
    )


def render_table(rows: List[Dict[str, Any]]) -> None:
    echo_heading("Lab Environment Monitoring (10-Minute Intervals)")
    if not rows:
        typer.echo("No data available.")
        return
    typer.echo(f"{'#':>3}  {'time':<8} {'temp':>7} {'hum':>7}  {'action':<14} status")
    for row in rows:
        status = row.get("status") or ""
        typer.echo(
            f"{row.get('index'):>3}  {row.get('time_label', ''):<8} "
            f"{_fmt(row.get('temperature')):>7} {_fmt(row.get('humidity')):>7}  "
            f"{row.get('actuator_action', ''):<14} ",
            nl=False,
        )
        typer.secho(status, fg=_STATUS_COLORS.get(status))


def render_stats(payload: Dict[str, Any]) -> None:
    echo_heading("Rolling Averages")
    echo_key_values(
        [
            ("window_size", payload.get("window_size")),
            ("sample_count", payload.get("sample_count")),
            ("avg_temperature", _fmt(payload.get("avg_temperature"), "°C")),
            ("avg_humidity", _fmt(payload.get("avg_humidity"), "%")),
        ]
    )


def render_chart(points: List[Dict[str, Any]]) -> None:
    echo_heading("Temperature & Humidity Trend")
    if not points:
        typer.echo("No data available.")
        return
    for point in points:
        typer.echo(
            f"  - {point.get('time_label')}: "
            f"{_fmt(point.get('temperature'), '°C')} / {_fmt(point.get('humidity'), '%')}"
        )


def render_import(payload: Dict[str, Any]) -> None:
    echo_heading("Import Result")
    echo_key_values(
        [
            ("imported", payload.get("imported")),
            ("history_size", payload.get("history_size")),
        ]
    )
    errors = payload.get("errors") or []
    typer.echo()
    echo_heading("Errors")
    if errors:
        for error in errors:
            typer.echo(f"  - row {error.get('row_number')}: {error.get('reason')}")
    else:
        typer.echo("No errors recorded.")
