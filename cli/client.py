from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the sensor chart service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def push_reading(self, inside: float, outside: float, humidity: float) -> str:
        params = {"inside": inside, "outside": outside, "humidity": humidity}
        return self._request_text("POST", "/pushtemp", params=params)

    def dump(self) -> str:
        return self._request_text("GET", "/gettemp")

    def last_update(self) -> str:
        return self._request_text("GET", "/lastupdate")

    def reset(self) -> str:
        return self._request_text("POST", "/resettemp")

    def chart_data(self) -> Optional[Dict[str, Any]]:
        try:
            response = self._client.get("/chart/data")
            if response.status_code == 404:
                return None
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.TransportError as exc:
            self._handle_transport_error(exc)
        return response.json()

    def _request_text(
        self, method: str, path: str, params: Optional[Dict[str, Any]] = None
    ) -> str:
        try:
            response = self._client.request(method, path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        except httpx.TransportError as exc:
            self._handle_transport_error(exc)
        return response.text

    def _handle_transport_error(self, exc: httpx.TransportError) -> None:
        typer.secho(
            f"Could not reach {self._config.base_url}: {exc}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except ValueError:
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
