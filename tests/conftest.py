from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from wunderground_exporter.config import get_settings
from wunderground_exporter.main import app
from wunderground_exporter.weather.fetcher import set_weather_client


def make_observation(station_id: str, metric: dict[str, Any] | None = None, **fields: Any) -> dict[str, Any]:
    metric_block = {
        "temp": 21.3,
        "heatIndex": 21.3,
        "dewpt": 12.1,
        "windChill": 21.3,
        "windSpeed": 3.6,
        "windGust": 5.4,
        "pressure": 1013.2,
        "precipRate": 0.0,
        "precipTotal": 1.27,
        "elev": 42.0,
    }
    metric_block.update(metric or {})
    observation = {
        "stationID": station_id,
        "obsTimeUtc": "2026-10-19T12:00:00Z",
        "obsTimeLocal": "2026-10-19 14:00:00",
        "neighborhood": "Testville",
        "softwareType": "EasyWeatherV1.6.4",
        "country": "NL",
        "solarRadiation": 312.5,
        "lat": 52.1,
        "lon": 4.3,
        "realtimeFrequency": None,
        "epoch": 1792411200,
        "uv": 3.0,
        "winddir": 225,
        "humidity": 55.2,
        "qcStatus": 1,
        "metric": metric_block,
    }
    observation.update(fields)
    return observation


class MockWeatherApi:
    """Stands in for api.weather.com behind an httpx.MockTransport.

    Unknown stations answer with a default observation for that station id.
    """

    observation = staticmethod(make_observation)

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: dict[str, tuple[int, bytes, dict[str, str]]] = {}
        self._errors: dict[str, Exception] = {}

    def set_observations(self, station_id: str, observations: list[dict[str, Any]]) -> None:
        self.set_response(station_id, 200, json.dumps({"observations": observations}).encode())

    def set_response(
        self, station_id: str, status_code: int, content: bytes, headers: dict[str, str] | None = None
    ) -> None:
        self._responses[station_id] = (status_code, content, headers or {})

    def set_error(self, station_id: str, error: Exception) -> None:
        self._errors[station_id] = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        station_id = request.url.params.get("stationId", "")
        if station_id in self._errors:
            raise self._errors[station_id]

        if station_id in self._responses:
            status_code, content, headers = self._responses[station_id]
        else:
            status_code, headers = 200, {}
            content = json.dumps({"observations": [make_observation(station_id)]}).encode()
        return httpx.Response(status_code, content=content, headers=headers)


@pytest.fixture
def weather_api() -> MockWeatherApi:
    return MockWeatherApi()


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch, weather_api: MockWeatherApi) -> None:
    monkeypatch.setenv("WU_API_KEY", "test-key")
    monkeypatch.delenv("WU_API_URL", raising=False)
    monkeypatch.delenv("WU_UNITS", raising=False)
    monkeypatch.delenv("ENABLE_METRICS_ENDPOINT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    get_settings.cache_clear()

    client = httpx.Client(transport=httpx.MockTransport(weather_api))
    set_weather_client(client)

    yield

    set_weather_client(None)
    client.close()
    get_settings.cache_clear()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
