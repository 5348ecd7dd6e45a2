from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wunderground_exporter.observability.logging import resolve_log_level


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    wu_api_key: str = Field(default="", alias="WU_API_KEY")
    wu_api_url: str = Field(
        default="https://api.weather.com/v2/pws/observations/current",
        alias="WU_API_URL",
    )
    # "m" is the provider's metric unit system.
    wu_units: str = Field(default="m", alias="WU_UNITS")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=9122, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    enable_metrics_endpoint: bool = Field(default=True, alias="ENABLE_METRICS_ENDPOINT")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        resolve_log_level(value)
        return value.strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
