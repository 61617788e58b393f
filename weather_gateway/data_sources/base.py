"""Interfaces and helpers for weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from weather_gateway.data_sources.open_meteo_client import WeatherSnapshot


class WeatherDataSource(Protocol):
    """Interface for anything that can provide a weather snapshot for the served location."""

    def fetch_snapshot(self) -> WeatherSnapshot:
        """Return a fresh snapshot or raise FetchError."""
        ...


@dataclass
class LocationWeatherDataSource(WeatherDataSource):
    """Bind a fixed location and upstream settings to a snapshot-fetching callable."""

    latitude: float
    longitude: float
    fetch: Callable[..., WeatherSnapshot]
    base_url: str
    timeout: float

    def fetch_snapshot(self) -> WeatherSnapshot:
        """Delegate to the configured fetch callable for this location."""
        return self.fetch(
            self.latitude,
            self.longitude,
            base_url=self.base_url,
            timeout=self.timeout,
        )
