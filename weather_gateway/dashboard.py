"""HTML rendering for the weather dashboard page."""
from html import escape

from weather_gateway.weather_service import WeatherReport, format_degrees, format_metric

_PAGE = """
<html>
  <head>
    <title>Weather Dashboard - {location}</title>
    <meta http-equiv="refresh" content="{refresh}">
    <style>
      body {{ font-family: Arial, sans-serif; margin: 20px; background: #f9f9f9; }}
      h1 {{ color: #333; }}
      .widget {{ margin: 10px 0; padding: 12px; border: 1px solid #ccc; border-radius: 8px; background: #fff; }}
    </style>
  </head>
  <body>
    <h1>Weather Dashboard - {location}</h1>
{widgets}
  </body>
</html>
"""

_WIDGET = '    <div class="widget"><strong>{label}:</strong> {value}</div>'


def dashboard_widgets(report: WeatherReport) -> list[tuple[str, str]]:
    """Return (label, value) pairs in display order."""
    return [
        ("Temperature (real-time)", format_metric(report, "temperature")),
        ("Apparent Temperature", f"{report.apparent_temperature_f:.1f}°F"),
        ("Wind Speed (forecast)", format_metric(report, "windspeed")),
        ("Wind Gusts", format_metric(report, "windgusts")),
        ("Wind Direction",
         f"{report.wind_direction_compass} ({format_degrees(report.wind_direction_deg)}°)"),
        ("Rainfall (last hour)", format_metric(report, "rainfall")),
        ("Relative Humidity", format_metric(report, "humidity")),
        ("Barometric Pressure", format_metric(report, "pressure")),
        ("UV Index", format_metric(report, "uv")),
    ]


def render_dashboard(report: WeatherReport, *, location_name: str, refresh_seconds: int = 300) -> str:
    """Render the full auto-refreshing dashboard page."""
    widgets = "\n".join(
        _WIDGET.format(label=escape(label), value=escape(value))
        for label, value in dashboard_widgets(report)
    )
    return _PAGE.format(
        location=escape(location_name),
        refresh=int(refresh_seconds),
        widgets=widgets,
    )
