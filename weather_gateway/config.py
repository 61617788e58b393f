"""Application configuration pulled from environment variables via pydantic."""
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the weather gateway."""
    model_config = SettingsConfigDict(env_prefix="WEATHER_", extra="ignore", populate_by_name=True)

    weather_source: str = "open_meteo"  # options: open_meteo
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    request_timeout_seconds: float = 10.0

    # Lincoln, NE
    latitude: float = 40.8136
    longitude: float = -96.7026
    location_name: str = "Lincoln, NE"

    refresh_seconds: int = 300
    log_level: str = "INFO"
    port: int = Field(default=3000, validation_alias=AliasChoices("PORT", "WEATHER_PORT"))

    @field_validator("forecast_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("latitude", mode="after")
    @classmethod
    def check_latitude(cls, v: float) -> float:
        if not -90.0 <= v <= 90.0:
            raise ValueError(f"latitude out of range: {v}")
        return v

    @field_validator("longitude", mode="after")
    @classmethod
    def check_longitude(cls, v: float) -> float:
        if not -180.0 <= v <= 180.0:
            raise ValueError(f"longitude out of range: {v}")
        return v


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
