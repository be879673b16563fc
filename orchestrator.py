"""
Orchestrator — runs searches and owns the widget's view state.

A search is two sequential lookups (geocode, then current conditions)
followed by a view transition. Surfaces (web page, Telegram) call
search() and read `state`; they never build view states themselves.

Overlapping searches:
  - Each search takes a token from a monotonically increasing counter
  - A completion only touches the view if its token is still the latest
  - Older completions are discarded, whichever order they finish in
"""

from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Callable

from models import ViewState, ResolvedWeather, _now
from openmeteo import SearchError, get_weather
import view

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchOutcome:
    city: str
    weather: Optional[ResolvedWeather] = None
    error: Optional[SearchError] = None
    applied: bool = True  # False when a newer search superseded this one

    @property
    def ok(self) -> bool:
        return self.error is None


class Orchestrator:
    def __init__(
        self,
        fetch: Callable[[str], ResolvedWeather] = get_weather,
        clock: Callable[[], datetime] = _now,
    ):
        self.state = ViewState()
        self._fetch = fetch
        self._clock = clock
        self._token = 0
        self._state_callback: Optional[Callable[[ViewState], None]] = None

    def set_state_callback(self, callback: Callable[[ViewState], None]):
        """
        Register a callback for view changes.
        callback(state) — called with every new ViewState.
        """
        self._state_callback = callback

    # ── Search ──────────────────────────────────────────────────

    async def search(self, city: str) -> Optional[SearchOutcome]:
        """
        Look up current weather for a city and update the view.
        Returns None (and changes nothing) for blank input.
        """
        city = city.strip()
        if not city:
            return None

        self._token += 1
        token = self._token
        self._set_state(view.start_loading(self.state))
        log.info(f"Search #{token}: {city}")

        try:
            # requests is blocking; keep the loop free for other searches
            weather = await asyncio.to_thread(self._fetch, city)
        except SearchError as e:
            log.warning(f"Search #{token} failed: {e}")
            if not self._is_current(token):
                return SearchOutcome(city=city, error=e, applied=False)
            self._set_state(view.show_error(self.state, str(e)))
            return SearchOutcome(city=city, error=e)

        if not self._is_current(token):
            return SearchOutcome(city=city, weather=weather, applied=False)
        self._set_state(view.show_result(self.state, weather, self._clock()))
        return SearchOutcome(city=city, weather=weather)

    def render(self) -> view.DisplayFields:
        return view.render(self.state)

    # ── Helpers ─────────────────────────────────────────────────

    def _is_current(self, token: int) -> bool:
        if token != self._token:
            log.info(f"Discarding search #{token}; #{self._token} is newer")
            return False
        return True

    def _set_state(self, state: ViewState):
        self.state = state
        if self._state_callback:
            self._state_callback(state)
