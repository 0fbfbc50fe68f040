from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the dashboard service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def push_reading(
        self,
        temperature: float,
        humidity: float,
        time_label: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> int:
        body: Dict[str, Any] = {"temperature": temperature, "humidity": humidity}
        if time_label:
            body["time_label"] = time_label
        if timestamp:
            body["timestamp"] = timestamp
        payload = self._request("POST", "/readings", json=body)
        history_size = payload.get("history_size")
        if not isinstance(history_size, int):
            raise typer.BadParameter("Unexpected response payload when pushing a reading.")
        return history_size

    def import_csv(self, path: Path) -> Dict[str, Any]:
        if not path.is_file():
            raise typer.BadParameter(f"Path {path} is not a file.")
        with path.open("rb") as handle:
            return self._request(
                "POST",
                "/readings/import",
                files={"file": (path.name, handle, "text/csv")},
            )

    def disconnect(self) -> None:
        self._request("POST", "/readings/disconnect")

    def get_current(self) -> Optional[Dict[str, Any]]:
        try:
            response = self._client.get("/readings/current")
            if response.status_code == 404:
                return None
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    def get_table(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        params = {"limit": limit} if limit is not None else None
        return self._request("GET", "/table", params=params)

    def get_stats(self, window: Optional[int] = None) -> Dict[str, Any]:
        params = {"window": window} if window is not None else None
        return self._request("GET", "/stats", params=params)

    def get_chart(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/chart")

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
