"""Helpers for fetching current and hourly weather from the Open-Meteo forecast API."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

import requests

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag='open_meteo_client')

OPEN_METEO_WEATHER_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_TIMEOUT_SECONDS = 10.0

HOURLY_VARS = [
    "precipitation",
    "wind_gusts_10m",
    "apparent_temperature",
    "pressure_msl",
    "wind_direction_10m",
    "relative_humidity_2m",
    "uv_index",
    "wind_speed_10m",
]

# Open-Meteo defaults; the conversions downstream assume exactly these.
EXPECTED_HOURLY_UNITS = {
    "precipitation": "mm",
    "wind_gusts_10m": "km/h",
    "apparent_temperature": "°C",
    "pressure_msl": "hPa",
    "wind_direction_10m": "°",
    "relative_humidity_2m": "%",
    "uv_index": "",
    "wind_speed_10m": "km/h",
}

# Acceptable alternative spellings that should not trigger warnings.
ALLOWED_HOURLY_UNIT_SYNONYMS = {
    "wind_direction_10m": {"°", "deg", "degrees"},
    "relative_humidity_2m": {"%", "percent"},
    "uv_index": {"", "index", "UV-index"},
}


class FetchError(Exception):
    """Raised when either upstream weather request cannot be completed or parsed."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None, body: Optional[str] = None):
        super().__init__(message)
        self.cause = cause
        self.body = body


@dataclass
class HourlySeries:
    """Hourly forecast arrays, indexed by hour offset from now."""
    precipitation: List[float]
    wind_gusts: List[float]
    apparent_temperature: List[float]
    pressure_msl: List[float]
    wind_direction: List[float]
    relative_humidity: List[float]
    uv_index: List[float]
    wind_speed: List[float]


@dataclass
class WeatherSnapshot:
    """Current conditions merged with the hourly forecast for one request."""
    current_temperature_c: float
    current_wind_direction_deg: float
    hourly: HourlySeries


def _warn_on_unexpected_units(units: dict, *, context: str):
    """Log a warning if Open-Meteo returns units the conversions do not expect."""
    if not units:
        return
    for field, expected in EXPECTED_HOURLY_UNITS.items():
        if field not in units:
            continue
        actual = units.get(field)
        if actual is None or actual == expected:
            continue
        allowed = ALLOWED_HOURLY_UNIT_SYNONYMS.get(field, set())
        if actual not in allowed:
            logger.warning(
                "Unexpected Open-Meteo unit",
                extra={"context": context, "field": field, "unit": actual, "expected": expected},
            )


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _error_body(exc: requests.RequestException) -> Optional[str]:
    """Return the upstream response body attached to a requests error, if any."""
    resp = getattr(exc, "response", None)
    if resp is None:
        return None
    return resp.text


def _get_json(session, url: str, params: dict, *, timeout: float, context: str) -> dict:
    """Issue one GET and return the decoded JSON body, raising FetchError on any failure."""
    try:
        resp = session.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as exc:
        raise FetchError(f"{context} request failed: {exc}", cause=exc, body=_error_body(exc)) from exc
    except ValueError as exc:
        raise FetchError(f"{context} response was not valid JSON", cause=exc) from exc
    if not isinstance(data, dict):
        raise FetchError(f"{context} response was not a JSON object")
    return data


def fetch_current_weather(
    latitude: float,
    longitude: float,
    *,
    session,
    base_url: str = OPEN_METEO_WEATHER_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> dict:
    """Fetch the `current_weather` block for the given coordinates."""
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current_weather": "true",
    }
    data = _get_json(session, base_url, params, timeout=timeout, context="current_weather")

    current = data.get("current_weather")
    if not isinstance(current, dict):
        raise FetchError("current_weather missing from upstream response")
    for field in ("temperature", "winddirection"):
        if current.get(field) is None:
            raise FetchError(f"current_weather.{field} missing from upstream response")
        if not _is_number(current[field]):
            raise FetchError(f"current_weather.{field} is not numeric: {current[field]!r}")
    return current


def fetch_hourly_series(
    latitude: float,
    longitude: float,
    *,
    session,
    base_url: str = OPEN_METEO_WEATHER_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> HourlySeries:
    """Fetch the hourly forecast arrays used by the gateway."""
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "hourly": ",".join(HOURLY_VARS),
    }
    data = _get_json(session, base_url, params, timeout=timeout, context="hourly")

    hourly = data.get("hourly")
    if not isinstance(hourly, dict):
        raise FetchError("hourly missing from upstream response")
    _warn_on_unexpected_units(data.get("hourly_units") or {}, context="hourly")

    for field in HOURLY_VARS:
        values = hourly.get(field)
        if not isinstance(values, list) or not values:
            raise FetchError(f"hourly.{field} missing or empty in upstream response")
        if values[0] is None:
            raise FetchError(f"hourly.{field}[0] is null in upstream response")
        if not _is_number(values[0]):
            raise FetchError(f"hourly.{field}[0] is not numeric: {values[0]!r}")

    return HourlySeries(
        precipitation=hourly["precipitation"],
        wind_gusts=hourly["wind_gusts_10m"],
        apparent_temperature=hourly["apparent_temperature"],
        pressure_msl=hourly["pressure_msl"],
        wind_direction=hourly["wind_direction_10m"],
        relative_humidity=hourly["relative_humidity_2m"],
        uv_index=hourly["uv_index"],
        wind_speed=hourly["wind_speed_10m"],
    )


def fetch_weather_snapshot(
    latitude: float,
    longitude: float,
    *,
    base_url: str = OPEN_METEO_WEATHER_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    session=None,
) -> WeatherSnapshot:
    """
    Fetch current weather and the hourly forecast in parallel and merge them.

    Both requests are submitted before either result is awaited. If either one
    fails the whole call raises FetchError; a partial snapshot is never returned.
    A fresh requests.Session is opened per call unless one is injected.
    """
    logger.info(
        "Fetching real-time and hourly weather data",
        extra={"latitude": latitude, "longitude": longitude},
    )

    own_session = session is None
    if own_session:
        session = requests.Session()
    try:
        with ThreadPoolExecutor(max_workers=2) as ex:
            current_future = ex.submit(
                fetch_current_weather, latitude, longitude,
                session=session, base_url=base_url, timeout=timeout,
            )
            hourly_future = ex.submit(
                fetch_hourly_series, latitude, longitude,
                session=session, base_url=base_url, timeout=timeout,
            )
            current = current_future.result()
            hourly = hourly_future.result()
    except FetchError as exc:
        logger.error(
            "Error fetching weather data: %s",
            exc.body if exc.body else exc,
            extra={"latitude": latitude, "longitude": longitude},
        )
        raise
    finally:
        if own_session:
            session.close()

    return WeatherSnapshot(
        current_temperature_c=current["temperature"],
        current_wind_direction_deg=current["winddirection"],
        hourly=hourly,
    )
