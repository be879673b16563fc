from datetime import datetime

import pytest

from models import CurrentConditions, ResolvedWeather
from openmeteo import CityNotFound, NetworkError
from orchestrator import Orchestrator

FIXED_NOW = datetime(2026, 10, 16, 14, 5)


def london() -> ResolvedWeather:
    return ResolvedWeather(
        name="London",
        country="United Kingdom",
        conditions=CurrentConditions(
            temperature_c=14.7,
            relative_humidity_pct=82,
            weather_code=61,
            surface_pressure_hpa=1013.2,
            wind_speed_kmh=11,
            visibility_m=9800,
        ),
    )


class FakeFetch:
    """Stands in for openmeteo.get_weather; records every city asked for."""

    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def __call__(self, city):
        self.calls.append(city)
        result = self.results.get(city)
        if result is None:
            raise CityNotFound(city)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fetch():
    return FakeFetch({
        "London": london(),
        "Offline": NetworkError(ConnectionError("Connection refused")),
    })


@pytest.fixture
def orchestrator(fetch):
    return Orchestrator(fetch=fetch, clock=lambda: FIXED_NOW)
