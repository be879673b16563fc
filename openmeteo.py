"""
Open-Meteo lookups — free, no API key required.

Two sequential calls: geocoding (city -> lat/lon), then the forecast
API's `current` block for those coordinates.
"""

import logging

import requests

from config import GEO_URL, WEATHER_URL, HTTP_TIMEOUT
from models import CurrentConditions, GeocodeResult, ResolvedWeather

log = logging.getLogger(__name__)

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "weather_code",
    "surface_pressure",
    "wind_speed_10m",
    "visibility",
)


class SearchError(Exception):
    """Base for anything that ends a search with a banner message."""


class CityNotFound(SearchError):
    def __init__(self, city: str):
        self.city = city
        super().__init__(f"City '{city}' not found.")


class NetworkError(SearchError):
    """Transport failure talking to either upstream."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(str(cause))


class DecodeError(NetworkError):
    """Upstream answered, but not with the JSON we expect."""


def _get_json(url: str, params: dict) -> dict:
    try:
        resp = requests.get(url, params=params, timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise NetworkError(e) from e
    try:
        data = resp.json()
    except ValueError as e:
        raise DecodeError(e) from e
    if not isinstance(data, dict):
        raise DecodeError(ValueError(f"Unexpected response from {url}"))
    return data


def geocode(city: str) -> GeocodeResult:
    """Best single match for a city name."""
    data = _get_json(GEO_URL, {
        "name": city,
        "count": 1,
        "language": "en",
        "format": "json",
    })
    results = data.get("results")
    if not results:
        raise CityNotFound(city)
    try:
        return GeocodeResult.from_api(results[0])
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(e) from e


def current_conditions(latitude: float, longitude: float) -> CurrentConditions:
    data = _get_json(WEATHER_URL, {
        "latitude": latitude,
        "longitude": longitude,
        "current": ",".join(CURRENT_FIELDS),
        "wind_speed_unit": "kmh",
    })
    try:
        return CurrentConditions.from_api(data["current"])
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(e) from e


def get_weather(city: str) -> ResolvedWeather:
    """Resolve a city and fetch its current conditions. Raises SearchError."""
    geo = geocode(city)
    log.info(f"Resolved '{city}' to {geo.name}, {geo.country} ({geo.latitude}, {geo.longitude})")
    conditions = current_conditions(geo.latitude, geo.longitude)
    return ResolvedWeather(name=geo.name, country=geo.country, conditions=conditions)
