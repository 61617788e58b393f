"""Data source factories for plugging different weather backends."""

from .base import LocationWeatherDataSource, WeatherDataSource
from .factory import build_data_source
from .open_meteo_client import (
    FetchError,
    HourlySeries,
    WeatherSnapshot,
    fetch_current_weather,
    fetch_hourly_series,
    fetch_weather_snapshot,
)

__all__ = [
    "build_data_source",
    "WeatherDataSource",
    "LocationWeatherDataSource",
    "FetchError",
    "HourlySeries",
    "WeatherSnapshot",
    "fetch_current_weather",
    "fetch_hourly_series",
    "fetch_weather_snapshot",
]
