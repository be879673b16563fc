"""
View state transitions and rendering.

Transitions take a ViewState and return the next one; render() turns a
ViewState into the strings and visibility flags of each display region.
Nothing here touches the network or the clock.
"""

from __future__ import annotations
import math
from decimal import Decimal, ROUND_HALF_UP
from dataclasses import dataclass, asdict
from datetime import datetime

from models import ViewState, ResolvedWeather, INITIAL, LOADING, RESULT
from weather_codes import describe


# ── Transitions ─────────────────────────────────────────────────

def start_loading(state: ViewState) -> ViewState:
    """Hide initial and result, show the spinner, clear any error."""
    # A search started while another is in flight inherits its fallback
    showing = state.result_visible or (state.loading_visible and state.showing_weather)
    return state.evolve(phase=LOADING, error="", showing_weather=showing)


def show_result(state: ViewState, weather: ResolvedWeather, now: datetime) -> ViewState:
    return ViewState(phase=RESULT, weather=weather, shown_at=now)


def show_error(state: ViewState, message: str) -> ViewState:
    """
    Spinner off, banner on. A result that was on screen when the search
    began stays up under the banner; otherwise the empty state returns.
    """
    if state.showing_weather and state.weather is not None:
        return state.evolve(phase=RESULT, error=message, showing_weather=False)
    return state.evolve(phase=INITIAL, error=message, showing_weather=False)


# ── Formatting ──────────────────────────────────────────────────

def _plain(value) -> str:
    # 82.0 -> "82", 1013.2 -> "1013.2"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_temperature(celsius: float) -> str:
    return str(math.floor(celsius + 0.5))


def format_visibility(meters: float) -> str:
    # Ties round up on the exact binary value: 250 -> "0.3", 350 -> "0.3"
    km = Decimal(meters / 1000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{km} km"


# Fixed en-US names; strftime's %A/%b/%p follow LC_TIME
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_timestamp(when: datetime) -> str:
    """e.g. 'Friday, Oct 16, 02:05 PM'"""
    hour = when.hour % 12 or 12
    meridiem = "AM" if when.hour < 12 else "PM"
    return (
        f"{_WEEKDAYS[when.weekday()]}, {_MONTHS[when.month - 1]} {when.day}, "
        f"{hour:02d}:{when.minute:02d} {meridiem}"
    )


@dataclass(frozen=True)
class DisplayFields:
    initial_visible: bool
    loading_visible: bool
    result_visible: bool
    error_visible: bool
    error: str = ""
    city: str = ""
    date_time: str = ""
    icon: str = ""
    temperature: str = ""
    description: str = ""
    humidity: str = ""
    wind_speed: str = ""
    visibility: str = ""
    pressure: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


def render(state: ViewState) -> DisplayFields:
    fields = {
        "initial_visible": state.initial_visible,
        "loading_visible": state.loading_visible,
        "result_visible": state.result_visible,
        "error_visible": state.error_visible,
        "error": state.error,
    }
    if state.result_visible:
        fields.update(_weather_fields(state.weather, state.shown_at))
    return DisplayFields(**fields)


def _weather_fields(weather: ResolvedWeather, shown_at: datetime) -> dict:
    c = weather.conditions
    info = describe(c.weather_code)
    return {
        "city": f"{weather.name}, {weather.country}",
        "date_time": format_timestamp(shown_at) if shown_at else "",
        "icon": info.icon,
        "temperature": format_temperature(c.temperature_c),
        "description": info.description,
        "humidity": f"{_plain(c.relative_humidity_pct)}%",
        "wind_speed": f"{_plain(c.wind_speed_kmh)} km/h",
        "visibility": format_visibility(c.visibility_m),
        "pressure": f"{_plain(c.surface_pressure_hpa)} hPa",
    }


def render_text(state: ViewState) -> str:
    """Plain-text rendering for chat surfaces."""
    d = render(state)
    lines = []
    if d.error_visible:
        lines.append(f"⚠ {d.error}")
    if d.loading_visible:
        lines.append("Loading...")
    elif d.result_visible:
        lines += [
            d.city,
            d.date_time,
            f"{d.temperature}°C  {d.description}",
            f"Humidity: {d.humidity}",
            f"Wind: {d.wind_speed}",
            f"Visibility: {d.visibility}",
            f"Pressure: {d.pressure}",
        ]
    elif not d.error_visible:
        lines.append("Search for a city to see its weather.")
    return "\n".join(lines)
