"""
WMO weather code table (as reported by Open-Meteo).

Icons are Font Awesome identifiers, rendered by the widget template.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional


@dataclass(frozen=True)
class WeatherDescriptor:
    description: str
    icon: str


UNKNOWN = WeatherDescriptor("Unknown", "fa-question-circle")

_CLEAR = "fa-sun"
_FEW_CLOUDS = "fa-cloud-sun"
_CLOUD = "fa-cloud"
_FOG = "fa-smog"
_DRIZZLE = "fa-cloud-rain"
_RAIN = "fa-cloud-showers-heavy"
_SNOW = "fa-snowflake"
_STORM = "fa-bolt"

WEATHER_CODES = MappingProxyType({
    # Clear / cloudy
    0: WeatherDescriptor("Clear sky", _CLEAR),
    1: WeatherDescriptor("Mainly clear", _FEW_CLOUDS),
    2: WeatherDescriptor("Partly cloudy", _FEW_CLOUDS),
    3: WeatherDescriptor("Overcast", _CLOUD),
    # Fog
    45: WeatherDescriptor("Fog", _FOG),
    48: WeatherDescriptor("Depositing rime fog", _FOG),
    # Drizzle
    51: WeatherDescriptor("Light drizzle", _DRIZZLE),
    53: WeatherDescriptor("Moderate drizzle", _DRIZZLE),
    55: WeatherDescriptor("Dense drizzle", _DRIZZLE),
    # Rain
    61: WeatherDescriptor("Slight rain", _RAIN),
    63: WeatherDescriptor("Moderate rain", _RAIN),
    65: WeatherDescriptor("Heavy rain", _RAIN),
    # Snow
    71: WeatherDescriptor("Slight snow", _SNOW),
    73: WeatherDescriptor("Moderate snow", _SNOW),
    75: WeatherDescriptor("Heavy snow", _SNOW),
    77: WeatherDescriptor("Snow grains", _SNOW),
    # Rain showers
    80: WeatherDescriptor("Slight rain showers", _RAIN),
    81: WeatherDescriptor("Moderate rain showers", _RAIN),
    82: WeatherDescriptor("Violent rain showers", _RAIN),
    # Snow showers
    85: WeatherDescriptor("Slight snow showers", _SNOW),
    86: WeatherDescriptor("Heavy snow showers", _SNOW),
    # Thunderstorm
    95: WeatherDescriptor("Thunderstorm", _STORM),
    96: WeatherDescriptor("Thunderstorm with hail", _STORM),
    99: WeatherDescriptor("Thunderstorm with heavy hail", _STORM),
})


def describe(code: Optional[int]) -> WeatherDescriptor:
    """Look up a WMO code; anything not in the table gets UNKNOWN."""
    try:
        return WEATHER_CODES.get(code, UNKNOWN)
    except TypeError:  # unhashable junk from a malformed payload
        return UNKNOWN
