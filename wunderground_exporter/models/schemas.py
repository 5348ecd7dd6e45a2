from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ObservationMetric(BaseModel):
    """Metric-unit block nested in each observation."""

    model_config = ConfigDict(populate_by_name=True)

    temp: float | None = None
    heat_index: float | None = Field(default=None, alias="heatIndex")
    dewpt: float | None = None
    wind_chill: float | None = Field(default=None, alias="windChill")
    wind_speed: float | None = Field(default=None, alias="windSpeed")
    wind_gust: float | None = Field(default=None, alias="windGust")
    pressure: float | None = None
    precip_rate: float | None = Field(default=None, alias="precipRate")
    precip_total: float | None = Field(default=None, alias="precipTotal")
    elev: float | None = None


class RawObservation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    station_id: str | None = Field(default=None, alias="stationID")
    obs_time_utc: str | None = Field(default=None, alias="obsTimeUtc")
    obs_time_local: str | None = Field(default=None, alias="obsTimeLocal")
    neighborhood: str | None = None
    software_type: str | None = Field(default=None, alias="softwareType")
    country: str | None = None
    solar_radiation: float | None = Field(default=None, alias="solarRadiation")
    lat: float | None = None
    lon: float | None = None
    # Shape varies between stations; kept only so decoding never trips on it.
    realtime_frequency: Any = Field(default=None, alias="realtimeFrequency")
    epoch: float | None = None
    uv: float | None = None
    winddir: float | None = None
    humidity: float | None = None
    qc_status: float | None = Field(default=None, alias="qcStatus")
    metric: ObservationMetric | None = None


class ObservationsResponse(BaseModel):
    observations: list[RawObservation]


class NormalizedObservation(BaseModel):
    station_id: str
    epoch: float | None = None
    latitude: float | None = None
    longitude: float | None = None
    elevation: float | None = None
    neighborhood: str = ""
    software_type: str = ""
    country: str = ""
    sensors: dict[str, float] = Field(default_factory=dict)
