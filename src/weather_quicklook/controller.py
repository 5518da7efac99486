# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
controller.py — Wire user actions (search, "use my location", unit toggle) to
the geocode → forecast → view pipeline.

The Controller owns a Session (last fetched data + unit preference) and the
current Display (state, message, view). Renderers (CLI, Streamlit) only read
Display; they never call the APIs themselves.

Every search/locate takes a new generation number when it starts. Its result
is only shown if no newer action has started since, so a slow response can
never overwrite a newer one.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from weather_quicklook.geocode import GeocodeError, NotFoundError, geocode, reverse_geocode
from weather_quicklook.geolocation import CapabilityUnavailable, PermissionDenied
from weather_quicklook.utils import DEFAULT_LOG_PATH, coords_label, log_error
from weather_quicklook.view import ForecastView, build_view
from weather_quicklook.weather import FetchError, fetch_weather

MSG_LOADING = "Loading…"
MSG_LOCATING = "Getting your location…"
MSG_CITY_NOT_FOUND = "Could not find that city. Try another search."
MSG_FORECAST_FAILED = "Could not load the forecast for that city. Try again."
MSG_GEO_UNSUPPORTED = "Geolocation is not supported on this system."
MSG_GEO_DENIED = "Location access denied."
MSG_GEO_FAILED = "Failed to get weather for your location."


class State(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Display:
    state: State = State.IDLE
    message: str | None = None
    view: ForecastView | None = None


@dataclass(frozen=True)
class LastData:
    data: dict
    place_label: str


@dataclass
class Session:
    last_data: LastData | None = None
    use_fahrenheit: bool = False
    generation: int = 0


class Controller:
    """Runs user actions against the Open-Meteo pipeline and tracks what to show."""

    def __init__(
        self,
        session: Session | None = None,
        geolocator=None,
        timeout: float | None = None,
        log_path: Path = DEFAULT_LOG_PATH,
        on_change: Callable[[Display], None] | None = None,
    ):
        self.session = session if session is not None else Session()
        self.geolocator = geolocator
        self.timeout = timeout
        self.log_path = log_path
        self.on_change = on_change
        self.display = Display()

    # ── Actions ───────────────────────────────────────────────

    def search(self, query: str) -> Display:
        """Geocode a city name, fetch its forecast and show it.

        A blank query does nothing.
        """
        query = query.strip()
        if not query:
            return self.display

        token = self._begin(MSG_LOADING)
        try:
            place = geocode(query, timeout=self.timeout)
        except NotFoundError as e:
            return self._fail(token, MSG_CITY_NOT_FOUND, e)

        try:
            data = fetch_weather(place.latitude, place.longitude, timeout=self.timeout)
        except FetchError as e:
            return self._fail(token, MSG_FORECAST_FAILED, e)

        return self._commit(token, data, place.display_name, MSG_FORECAST_FAILED)

    def locate(self) -> Display:
        """Show the forecast for the device's own location.

        The reverse lookup and the forecast request run at the same time.
        Both must succeed; otherwise nothing is shown.
        """
        if self.geolocator is None:
            token = self._next_generation()
            return self._fail(
                token, MSG_GEO_UNSUPPORTED, CapabilityUnavailable("no geolocator configured")
            )

        token = self._begin(MSG_LOCATING)
        try:
            latitude, longitude = self.geolocator.locate()
        except PermissionDenied as e:
            return self._fail(token, MSG_GEO_DENIED, e)

        with ThreadPoolExecutor(max_workers=2) as pool:
            place_future = pool.submit(reverse_geocode, latitude, longitude, self.timeout)
            data_future = pool.submit(fetch_weather, latitude, longitude, self.timeout)
            try:
                place = place_future.result()
                data = data_future.result()
            except (GeocodeError, FetchError) as e:
                return self._fail(token, MSG_GEO_FAILED, e)

        label = place.display_name if place is not None else coords_label(latitude, longitude)
        return self._commit(token, data, label, MSG_GEO_FAILED)

    def set_unit(self, fahrenheit: bool) -> Display:
        """Switch °C/°F and re-render the last forecast, if any, without refetching."""
        self.session.use_fahrenheit = fahrenheit
        last = self.session.last_data
        if last is None:
            return self.display
        view = build_view(last.data, last.place_label, fahrenheit)
        return self._show(Display(State.SUCCESS, view=view))

    # ── Internals ─────────────────────────────────────────────

    def _next_generation(self) -> int:
        self.session.generation += 1
        return self.session.generation

    def _is_stale(self, token: int) -> bool:
        return token != self.session.generation

    def _begin(self, message: str) -> int:
        token = self._next_generation()
        self._show(Display(State.LOADING, message=message))
        return token

    def _commit(self, token: int, data: dict, place_label: str, error_message: str) -> Display:
        """Render fresh data and cache it, unless a newer action has started."""
        if self._is_stale(token):
            return self.display
        try:
            view = build_view(data, place_label, self.session.use_fahrenheit)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            return self._fail(token, error_message, e)
        self.session.last_data = LastData(data, place_label)
        return self._show(Display(State.SUCCESS, view=view))

    def _fail(self, token: int, message: str, error: Exception) -> Display:
        log_error(f"{message} ({type(error).__name__}: {error})", log_path=self.log_path)
        if self._is_stale(token):
            return self.display
        return self._show(Display(State.ERROR, message=message))

    def _show(self, display: Display) -> Display:
        self.display = display
        if self.on_change is not None:
            self.on_change(display)
        return display
