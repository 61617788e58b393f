"""Factory helpers for choosing a weather data source at startup."""

from __future__ import annotations

from weather_gateway import config
from weather_gateway.data_sources.base import LocationWeatherDataSource, WeatherDataSource
from weather_gateway.data_sources.open_meteo_client import fetch_weather_snapshot
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "open_meteo"


def build_data_source(settings: config.Settings | None = None) -> WeatherDataSource:
    """Instantiate the configured weather data source."""
    settings = settings or config.settings
    source = (settings.weather_source or DEFAULT_SOURCE_NAME).lower()

    if source == "open_meteo":
        logger.info(
            "Using Open-Meteo data source",
            extra={"latitude": settings.latitude, "longitude": settings.longitude},
        )
        return LocationWeatherDataSource(
            latitude=settings.latitude,
            longitude=settings.longitude,
            fetch=fetch_weather_snapshot,
            base_url=settings.forecast_url,
            timeout=settings.request_timeout_seconds,
        )

    raise ValueError(f"Unknown weather source '{source}'")
