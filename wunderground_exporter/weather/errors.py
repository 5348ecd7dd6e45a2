from __future__ import annotations


class WeatherFetchError(Exception):
    """Base class for failures while fetching a station observation."""

    reason = "error"


class TransportError(WeatherFetchError):
    reason = "transport"


class UpstreamStatusError(WeatherFetchError):
    reason = "status"

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"API request failed with status {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class DecodeError(WeatherFetchError):
    reason = "decode"


class NoObservationError(WeatherFetchError):
    reason = "no_observation"

    def __init__(self, station_id: str) -> None:
        super().__init__(f"no observations returned for station {station_id}")
        self.station_id = station_id
