"""HTTP routes for the weather gateway."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel

from .config import settings
from .dashboard import render_dashboard
from .data_sources import FetchError, build_data_source
from .weather_service import METRIC_FORMATTERS, WeatherReport, format_metric, get_weather_report
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="weather_gateway/api")

FETCH_ERROR_TEXT = "Error fetching weather data."
FETCH_ERROR_DETAIL = "Weather fetch failed"

router = APIRouter()
DATA_SOURCE = build_data_source(settings)


class WeatherData(BaseModel):
    """Serialized derived weather values for the JSON endpoint."""
    location: str
    temperature_f: float
    apparent_temperature_f: float
    wind_speed_mph: float
    wind_gusts_mph: float
    wind_direction_deg: float
    wind_direction_compass: str
    precipitation_in: float
    relative_humidity_pct: int
    pressure_inhg: float
    uv_index: float


class ErrorResponse(BaseModel):
    """Error body returned when the upstream fetch fails."""
    error: str


def _fetch_report() -> WeatherReport | None:
    """Fetch and convert one snapshot; None when the upstream fetch failed."""
    try:
        return get_weather_report(DATA_SOURCE)
    except FetchError as exc:
        logger.warning("Weather fetch failed; returning error response", extra={"error": str(exc)})
        return None


def _text_route(metric: str):
    """Build a handler that serves one metric as plain text."""
    def handler():
        report = _fetch_report()
        if report is None:
            return PlainTextResponse(FETCH_ERROR_TEXT)
        return PlainTextResponse(format_metric(report, metric))

    handler.__name__ = f"get_{metric}"
    handler.__doc__ = f"Return the current {metric} as plain text."
    return handler


for _metric in METRIC_FORMATTERS:
    router.add_api_route(f"/{_metric}", _text_route(_metric), methods=["GET"], response_class=PlainTextResponse)


@router.get(
    "/data",
    response_model=WeatherData,
    responses={500: {"model": ErrorResponse}},
)
def get_data():
    """Return every derived value as JSON."""
    report = _fetch_report()
    if report is None:
        return JSONResponse(status_code=500, content={"error": FETCH_ERROR_DETAIL})
    return WeatherData(location=settings.location_name, **report.to_payload())


@router.get("/", response_class=HTMLResponse)
def dashboard():
    """Serve the auto-refreshing dashboard page."""
    report = _fetch_report()
    if report is None:
        return HTMLResponse(FETCH_ERROR_TEXT)
    return HTMLResponse(
        render_dashboard(
            report,
            location_name=settings.location_name,
            refresh_seconds=settings.refresh_seconds,
        )
    )
