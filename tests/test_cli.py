from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
import pytest
import typer
from typer.testing import CliRunner

from cli.app import app
from cli.client import ApiClient
from cli.config import CLIConfig, load_config


class StubClient:
    def __init__(self, config) -> None:
        self.config = config
        self.pushed: List[tuple[float, float, float]] = []
        self.reset_calls = 0
        self.chart_payload: Optional[Dict[str, Any]] = {
            "labels": ["10:00:00", "10:00:10"],
            "series_inside": [20.0, 22.0],
            "series_outside": [20.0, 22.0],
            "series_humidity": [50.0, 55.0],
            "temp_axis_min": 19.8,
            "temp_axis_max": 22.2,
            "humidity_axis_min": 49.5,
            "humidity_axis_max": 55.5,
        }
        self.closed = False

    def push_reading(self, inside: float, outside: float, humidity: float) -> str:
        self.pushed.append((inside, outside, humidity))
        return "Data added"

    def dump(self) -> str:
        return "20.00 22.00\n10.00 12.00\n50.00 55.00"

    def last_update(self) -> str:
        return "Last update was 00:00:10 before"

    def reset(self) -> str:
        self.reset_calls += 1
        return "Drop ok"

    def chart_data(self) -> Optional[Dict[str, Any]]:
        return self.chart_payload

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def stub(monkeypatch) -> StubClient:
    client = StubClient(config=None)

    def factory(config):
        client.config = config
        return client

    monkeypatch.setattr("cli.app.ApiClient", factory)
    return client


def test_push_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(
        app, ["push", "--inside", "21.5", "--outside", "9", "--humidity", "48"]
    )

    assert result.exit_code == 0
    assert "Data added" in result.stdout
    assert stub.pushed == [(21.5, 9.0, 48.0)]
    assert stub.closed is True


def test_base_url_option_reaches_client(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["--base-url", "http://sensors:9000/", "dump"])

    assert result.exit_code == 0
    assert stub.config.base_url == "http://sensors:9000"
    assert "20.00 22.00" in result.stdout


def test_last_update_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["last-update"])

    assert result.exit_code == 0
    assert "00:00:10" in result.stdout


def test_reset_requires_confirmation(runner: CliRunner, stub: StubClient) -> None:
    declined = runner.invoke(app, ["reset"], input="n\n")
    assert declined.exit_code != 0
    assert stub.reset_calls == 0

    confirmed = runner.invoke(app, ["reset", "--yes"])
    assert confirmed.exit_code == 0
    assert "Drop ok" in confirmed.stdout
    assert stub.reset_calls == 1


def test_chart_data_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["chart-data"])

    assert result.exit_code == 0
    assert "19.80 .. 22.20" in result.stdout
    assert "10:00:10" in result.stdout


def test_chart_data_command_without_data(runner: CliRunner, stub: StubClient) -> None:
    stub.chart_payload = None

    result = runner.invoke(app, ["chart-data"])

    assert result.exit_code == 0
    assert "No data available" in result.stdout


def test_load_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://env-host:8080/")
    monkeypatch.setenv("CLI_REQUEST_TIMEOUT", "not-a-number")

    config = load_config()

    assert config == CLIConfig(base_url="http://env-host:8080", timeout=10.0)


def test_client_reports_http_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"detail": 'Wrong param "inside"'})

    client = ApiClient(CLIConfig())
    client._client = httpx.Client(
        base_url="http://testserver", transport=httpx.MockTransport(handler)
    )

    with pytest.raises(typer.Exit):
        client.push_reading(inside=20.0, outside=10.0, humidity=50.0)
    client.close()


def test_client_returns_none_when_chart_is_empty() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/chart/data"
        return httpx.Response(404, json={"detail": "No data available"})

    client = ApiClient(CLIConfig())
    client._client = httpx.Client(
        base_url="http://testserver", transport=httpx.MockTransport(handler)
    )

    assert client.chart_data() is None
    client.close()
