"""
Data models for lookups and the widget's view state.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


def _now() -> datetime:
    # Local wall-clock time; the widget shows when a result was displayed
    return datetime.now()


@dataclass(frozen=True)
class GeocodeResult:
    latitude: float
    longitude: float
    name: str
    country: str

    @classmethod
    def from_api(cls, row: dict) -> GeocodeResult:
        return cls(
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
            name=row.get("name", ""),
            country=row.get("country", ""),
        )


@dataclass(frozen=True)
class CurrentConditions:
    temperature_c: float
    relative_humidity_pct: float
    weather_code: int
    surface_pressure_hpa: float
    wind_speed_kmh: float
    visibility_m: float

    @classmethod
    def from_api(cls, current: dict) -> CurrentConditions:
        """
        Build from the `current` block of a forecast response.
        Raises KeyError, TypeError or ValueError on missing, null or
        non-numeric fields.
        """
        return cls(
            temperature_c=float(current["temperature_2m"]),
            relative_humidity_pct=float(current["relative_humidity_2m"]),
            weather_code=int(current["weather_code"]),
            surface_pressure_hpa=float(current["surface_pressure"]),
            wind_speed_kmh=float(current["wind_speed_10m"]),
            visibility_m=float(current["visibility"]),
        )


@dataclass(frozen=True)
class ResolvedWeather:
    name: str
    country: str
    conditions: CurrentConditions


INITIAL = "initial"
LOADING = "loading"
RESULT = "result"


@dataclass(frozen=True)
class ViewState:
    """
    Everything the widget displays. Never mutated: each transition
    builds a new value (see view.py).

    `weather` is the last result put on screen. It survives a `loading`
    phase so a failed search can fall back to it, but it is only
    visible while `phase == RESULT`.
    """
    phase: str = INITIAL  # initial, loading, result
    weather: Optional[ResolvedWeather] = None
    shown_at: Optional[datetime] = None
    error: str = ""
    showing_weather: bool = False  # was a result on screen when loading began

    @property
    def initial_visible(self) -> bool:
        return self.phase == INITIAL

    @property
    def loading_visible(self) -> bool:
        return self.phase == LOADING

    @property
    def result_visible(self) -> bool:
        return self.phase == RESULT and self.weather is not None

    @property
    def error_visible(self) -> bool:
        return bool(self.error)

    def evolve(self, **changes) -> ViewState:
        return replace(self, **changes)
