"""Turn a raw weather snapshot into US customary display values."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from weather_gateway.conversions import (
    celsius_to_fahrenheit,
    degrees_to_compass,
    hpa_to_inhg,
    kmh_to_mph,
    mm_to_inches,
)
from weather_gateway.data_sources import WeatherDataSource, WeatherSnapshot
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="weather_service")


@dataclass
class WeatherReport:
    """Converted, unrounded values derived from one snapshot.

    Temperature and wind direction come from current weather; every other
    metric is the first hour of the hourly forecast.
    """
    temperature_f: float
    apparent_temperature_f: float
    wind_speed_mph: float
    wind_gusts_mph: float
    wind_direction_deg: float
    wind_direction_compass: str
    precipitation_in: float
    relative_humidity_pct: float
    pressure_inhg: float
    uv_index: float

    def to_payload(self) -> dict:
        """Return the JSON body for the combined data endpoint."""
        return {
            "temperature_f": round(self.temperature_f, 1),
            "apparent_temperature_f": round(self.apparent_temperature_f, 1),
            "wind_speed_mph": round(self.wind_speed_mph, 1),
            "wind_gusts_mph": round(self.wind_gusts_mph, 1),
            "wind_direction_deg": self.wind_direction_deg,
            "wind_direction_compass": self.wind_direction_compass,
            "precipitation_in": round(self.precipitation_in, 2),
            "relative_humidity_pct": round(self.relative_humidity_pct),
            "pressure_inhg": round(self.pressure_inhg, 2),
            "uv_index": round(self.uv_index, 1),
        }


def build_weather_report(snapshot: WeatherSnapshot) -> WeatherReport:
    """Convert a snapshot's current values and hourly[0] values into a report."""
    hourly = snapshot.hourly
    return WeatherReport(
        temperature_f=celsius_to_fahrenheit(snapshot.current_temperature_c),
        apparent_temperature_f=celsius_to_fahrenheit(hourly.apparent_temperature[0]),
        wind_speed_mph=kmh_to_mph(hourly.wind_speed[0]),
        wind_gusts_mph=kmh_to_mph(hourly.wind_gusts[0]),
        wind_direction_deg=snapshot.current_wind_direction_deg,
        wind_direction_compass=degrees_to_compass(snapshot.current_wind_direction_deg),
        precipitation_in=mm_to_inches(hourly.precipitation[0]),
        relative_humidity_pct=hourly.relative_humidity[0],
        pressure_inhg=hpa_to_inhg(hourly.pressure_msl[0]),
        uv_index=hourly.uv_index[0],
    )


def format_degrees(value: float) -> str:
    """Render a heading as received, minus a trailing '.0' (90.0 -> '90', 123.4567 -> '123.4567')."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


# Plain-text widget bodies keyed by route name.
METRIC_FORMATTERS: Dict[str, Callable[[WeatherReport], str]] = {
    "temperature": lambda r: f"{r.temperature_f:.1f}°F",
    "windspeed": lambda r: f"{r.wind_speed_mph:.1f} mph",
    "windgusts": lambda r: f"{r.wind_gusts_mph:.1f} mph",
    "rainfall": lambda r: f"{r.precipitation_in:.2f} inches",
    "humidity": lambda r: f"{r.relative_humidity_pct:.0f}%",
    "pressure": lambda r: f"{r.pressure_inhg:.2f} inHg",
    "uv": lambda r: f"{r.uv_index:.1f}",
}


def format_metric(report: WeatherReport, name: str) -> str:
    """Format a single named metric; raises KeyError for unknown names."""
    return METRIC_FORMATTERS[name](report)


def get_weather_report(data_source: WeatherDataSource) -> WeatherReport:
    """Fetch one snapshot from the data source and convert it. FetchError propagates."""
    snapshot = data_source.fetch_snapshot()
    report = build_weather_report(snapshot)
    logger.debug("Built weather report", extra={"report": report.to_payload()})
    return report
