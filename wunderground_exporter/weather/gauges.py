from __future__ import annotations

from dataclasses import dataclass

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from wunderground_exporter.models.schemas import NormalizedObservation

LABEL_NAMES = ("station_id", "neighborhood", "software_type", "country")


@dataclass(frozen=True)
class GaugeDefinition:
    name: str
    help: str


# Keys without a matching field in the current API stay registered but unset.
SENSOR_METRICS: dict[str, GaugeDefinition] = {
    "temperature": GaugeDefinition("wunderground_temp", "Air temperature in degrees Celsius"),
    "dewpoint": GaugeDefinition("wunderground_dewpt", "Dew point temperature in degrees Celsius"),
    "humidity": GaugeDefinition("wunderground_humidity", "Relative humidity in percentage"),
    "pressure": GaugeDefinition("wunderground_pressure", "Atmospheric pressure at sea level in hectopascals"),
    "windspeed": GaugeDefinition("wunderground_windSpeed", "Wind speed in meters per second"),
    "winddirection": GaugeDefinition("wunderground_windDir", "Wind direction in degrees"),
    "windgust": GaugeDefinition("wunderground_windGust", "Wind gust speed in meters per second"),
    "precipitation_rate": GaugeDefinition("wunderground_precipRate", "Precipitation rate in millimeters per hour"),
    "precipitation_total": GaugeDefinition(
        "wunderground_precipTotal", "Total accumulated precipitation in millimeters"
    ),
    "uv_index": GaugeDefinition("wunderground_uv", "Ultraviolet Index"),
    "solar_radiation": GaugeDefinition("wunderground_solarRadiation", "Solar radiation in watts per square meter"),
    "visibility": GaugeDefinition("wunderground_visibility", "Visibility in meters"),
    "soil_temperature": GaugeDefinition("wunderground_soilTemp", "Soil temperature in degrees Celsius"),
    "soil_moisture": GaugeDefinition("wunderground_soilMoisture", "Soil moisture in percentage"),
    "windchill": GaugeDefinition("wunderground_windChill", "Wind chill temperature in degrees Celsius"),
    "elevation": GaugeDefinition("wunderground_elevation", "Elevation in meters"),
    "latitude": GaugeDefinition("wunderground_latitude", "Latitude"),
    "longitude": GaugeDefinition("wunderground_longitude", "Longitude"),
}


def build_weather_metrics(registry: CollectorRegistry) -> dict[str, Gauge]:
    """Register a fresh gauge for every known sensor on ``registry``."""
    return {
        key: Gauge(definition.name, definition.help, labelnames=LABEL_NAMES, registry=registry)
        for key, definition in SENSOR_METRICS.items()
    }


def render(station_id: str, obs: NormalizedObservation) -> bytes:
    """
    Render one observation in the Prometheus text exposition format.

    Every call gets its own registry so concurrent scrapes never share label
    state. Samples are labeled with the requested station id, not the one
    the provider echoed back.
    """
    registry = CollectorRegistry()
    gauges = build_weather_metrics(registry)

    labels = (station_id, obs.neighborhood, obs.software_type, obs.country)
    for sensor, value in obs.sensors.items():
        gauge = gauges.get(sensor)
        if gauge is None:
            continue
        gauge.labels(*labels).set(value)

    return generate_latest(registry)
