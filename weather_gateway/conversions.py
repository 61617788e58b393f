"""Metric to US customary unit conversions."""
from __future__ import annotations

import math

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def kmh_to_mph(kmh: float) -> float:
    return kmh * 0.621371


def mm_to_inches(mm: float) -> float:
    return mm * 0.0393701


def hpa_to_inhg(hpa: float) -> float:
    return hpa * 0.02953


def degrees_to_compass(degrees: float) -> str:
    """Map a heading in degrees to one of 16 compass points.

    Halfway headings round up (11.25 -> NNE), and the modulo folds 360 back to N.
    """
    index = math.floor(degrees / 22.5 + 0.5) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]
