from __future__ import annotations

import httpx
from pydantic import ValidationError

from wunderground_exporter.config import get_settings
from wunderground_exporter.models.schemas import NormalizedObservation, ObservationsResponse, RawObservation
from wunderground_exporter.observability.upstream import instrument_upstream_call
from wunderground_exporter.weather.errors import (
    DecodeError,
    NoObservationError,
    TransportError,
    UpstreamStatusError,
)

_client: httpx.Client | None = None


def set_weather_client(client: httpx.Client | None) -> None:
    global _client
    _client = client


def get_weather_client() -> httpx.Client:
    global _client
    if _client is None:
        _client = httpx.Client()
    return _client


def build_observation_url(station_id: str) -> httpx.URL:
    settings = get_settings()
    return httpx.URL(
        settings.wu_api_url,
        params={
            "stationId": station_id,
            "format": "json",
            "apiKey": settings.wu_api_key,
            "units": settings.wu_units,
        },
    )


def normalize_observation(station_id: str, raw: RawObservation) -> NormalizedObservation:
    """
    Flatten one wire observation into the sensor mapping rendered as gauges.

    Values are copied as-is. Sensors the station reported as null are left out
    so their gauges stay unset instead of reading zero.
    """
    metric = raw.metric
    candidates = {
        "temperature": metric.temp if metric else None,
        "dewpoint": metric.dewpt if metric else None,
        "humidity": raw.humidity,
        "pressure": metric.pressure if metric else None,
        "windspeed": metric.wind_speed if metric else None,
        "winddirection": raw.winddir,
        "windgust": metric.wind_gust if metric else None,
        "precipitation_rate": metric.precip_rate if metric else None,
        "precipitation_total": metric.precip_total if metric else None,
        "uv_index": raw.uv,
        "solar_radiation": raw.solar_radiation,
    }
    return NormalizedObservation(
        station_id=raw.station_id or station_id,
        epoch=raw.epoch,
        latitude=raw.lat,
        longitude=raw.lon,
        elevation=metric.elev if metric else None,
        neighborhood=raw.neighborhood or "",
        software_type=raw.software_type or "",
        country=raw.country or "",
        sensors={key: value for key, value in candidates.items() if value is not None},
    )


def _fetch_once(station_id: str) -> NormalizedObservation:
    client = get_weather_client()
    try:
        response = client.get(build_observation_url(station_id))
    except httpx.DecodingError as exc:
        # Body arrived but its content-encoding could not be undone.
        raise DecodeError(f"undecodable response body: {exc}") from exc
    except httpx.RequestError as exc:
        raise TransportError(str(exc) or exc.__class__.__name__) from exc

    if response.status_code != 200:
        raise UpstreamStatusError(response.status_code, response.text)

    try:
        payload = ObservationsResponse.model_validate_json(response.content)
    except ValidationError as exc:
        raise DecodeError(f"malformed observation payload: {exc}") from exc

    if len(payload.observations) == 0:
        raise NoObservationError(station_id)

    return normalize_observation(station_id, payload.observations[0])


def fetch(station_id: str) -> NormalizedObservation:
    """Fetch the current observation for one station (single GET, no retry)."""
    return instrument_upstream_call(station_id=station_id, fn=lambda: _fetch_once(station_id))
