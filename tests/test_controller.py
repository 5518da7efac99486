# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
test_controller.py — Unit tests for the Controller state machine.

geocode / reverse_geocode / fetch_weather are replaced on the controller
module, so no network calls happen.
"""

import threading
from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest

from weather_quicklook.controller import (
    MSG_CITY_NOT_FOUND,
    MSG_FORECAST_FAILED,
    MSG_GEO_DENIED,
    MSG_GEO_FAILED,
    MSG_GEO_UNSUPPORTED,
    Controller,
    Display,
    LastData,
    Session,
    State,
)
from weather_quicklook.geocode import GeocodeError, NotFoundError, Place
from weather_quicklook.geolocation import FixedGeolocator
from weather_quicklook.weather import FetchError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_forecast_payload(temp: float = 0.0, n: int = 7) -> dict:
    base = date(2024, 3, 4)
    return {
        "current_weather": {"time": "2024-03-04T15:00", "temperature": temp, "weathercode": 0},
        "daily": {
            "time": [(base + timedelta(days=i)).isoformat() for i in range(n)],
            "weathercode": [0] * n,
            "temperature_2m_max": [10.0] * n,
            "temperature_2m_min": [0.0] * n,
            "precipitation_sum": [0.0] * n,
        },
    }


@pytest.fixture()
def api(monkeypatch):
    """Fake geocode / reverse_geocode / fetch_weather on the controller module."""
    fakes = MagicMock()
    fakes.geocode.return_value = Place("Paris, Île-de-France, France", 48.85, 2.35)
    fakes.reverse_geocode.return_value = Place("London, England, United Kingdom", 51.5, -0.12)
    fakes.fetch_weather.return_value = _make_forecast_payload()
    monkeypatch.setattr("weather_quicklook.controller.geocode", fakes.geocode)
    monkeypatch.setattr("weather_quicklook.controller.reverse_geocode", fakes.reverse_geocode)
    monkeypatch.setattr("weather_quicklook.controller.fetch_weather", fakes.fetch_weather)
    return fakes


@pytest.fixture()
def log_path(tmp_path):
    return tmp_path / "quicklook.log"


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------

def test_initial_display_is_idle(log_path):
    assert Controller(log_path=log_path).display == Display(State.IDLE)


def test_blank_search_is_a_no_op(api, log_path):
    controller = Controller(log_path=log_path)
    display = controller.search("   ")
    assert display.state is State.IDLE
    api.geocode.assert_not_called()
    assert controller.session.generation == 0


def test_search_success_renders_and_caches(api, log_path):
    controller = Controller(log_path=log_path)

    display = controller.search("  Paris ")

    assert display.state is State.SUCCESS
    assert display.view.current.place_label == "Paris, Île-de-France, France"
    assert len(display.view.days) == 7
    api.geocode.assert_called_once_with("Paris", timeout=None)
    api.fetch_weather.assert_called_once_with(48.85, 2.35, timeout=None)
    assert controller.session.last_data == LastData(api.fetch_weather.return_value,
                                                    "Paris, Île-de-France, France")


def test_search_passes_timeout(api, log_path):
    Controller(timeout=7, log_path=log_path).search("Paris")
    api.geocode.assert_called_once_with("Paris", timeout=7)


def test_search_goes_through_loading(api, log_path):
    states = []
    controller = Controller(log_path=log_path, on_change=lambda d: states.append(d.state))
    controller.search("Paris")
    assert states == [State.LOADING, State.SUCCESS]


def test_search_city_not_found(api, log_path):
    api.geocode.side_effect = NotFoundError("Location not found")
    controller = Controller(log_path=log_path)

    display = controller.search("Atlantis")

    assert display.state is State.ERROR
    assert display.message == MSG_CITY_NOT_FOUND
    assert display.view is None
    api.fetch_weather.assert_not_called()


def test_search_forecast_failure_has_its_own_message(api, log_path):
    api.fetch_weather.side_effect = FetchError("503")
    display = Controller(log_path=log_path).search("Paris")
    assert display.state is State.ERROR
    assert display.message == MSG_FORECAST_FAILED


def test_malformed_forecast_is_an_error_not_a_crash(api, log_path):
    api.fetch_weather.return_value = {"daily": {}}
    controller = Controller(log_path=log_path)
    display = controller.search("Paris")
    assert display.state is State.ERROR
    assert controller.session.last_data is None


def test_failed_search_keeps_previous_cache(api, log_path):
    controller = Controller(log_path=log_path)
    controller.search("Paris")
    cached = controller.session.last_data

    api.geocode.side_effect = NotFoundError("nope")
    display = controller.search("Atlantis")

    assert display.state is State.ERROR
    assert display.view is None  # forecast display is cleared
    assert controller.session.last_data is cached


def test_errors_are_logged(api, log_path):
    api.geocode.side_effect = NotFoundError("Location not found")
    Controller(log_path=log_path).search("Atlantis")
    assert MSG_CITY_NOT_FOUND in log_path.read_text()


def test_stale_search_does_not_overwrite_newer_one(api, log_path):
    controller = Controller(log_path=log_path)
    api.geocode.side_effect = lambda q, timeout=None: Place(q, 1.0, 2.0)
    older_payload = _make_forecast_payload(temp=1.0)
    newer_payload = _make_forecast_payload(temp=2.0)

    def fetch(lat, lon, timeout=None):
        if api.fetch_weather.call_count == 1:
            # A second search is started and finishes while the first is still in flight
            controller.search("Newer")
            return older_payload
        return newer_payload

    api.fetch_weather.side_effect = fetch

    display = controller.search("Older")

    assert display.view.current.place_label == "Newer"
    assert controller.display.view.current.place_label == "Newer"
    assert controller.session.last_data.data is newer_payload


def test_stale_failure_does_not_hide_newer_result(api, log_path):
    controller = Controller(log_path=log_path)

    def fetch(lat, lon, timeout=None):
        if api.fetch_weather.call_count == 1:
            controller.search("Newer")
            raise FetchError("late failure")
        return _make_forecast_payload()

    api.fetch_weather.side_effect = fetch

    display = controller.search("Older")

    assert display.state is State.SUCCESS
    assert controller.display.state is State.SUCCESS


# ---------------------------------------------------------------------------
# locate
# ---------------------------------------------------------------------------

def test_locate_without_geolocator_reports_unsupported(api, log_path):
    states = []
    controller = Controller(log_path=log_path, on_change=lambda d: states.append(d.state))

    display = controller.locate()

    assert display.state is State.ERROR
    assert display.message == MSG_GEO_UNSUPPORTED
    assert State.LOADING not in states
    api.fetch_weather.assert_not_called()


def test_locate_permission_denied(api, log_path):
    controller = Controller(geolocator=FixedGeolocator(1.0, 2.0, allow=False), log_path=log_path)
    display = controller.locate()
    assert display.state is State.ERROR
    assert display.message == MSG_GEO_DENIED
    api.fetch_weather.assert_not_called()


def test_locate_success_uses_reverse_label(api, log_path):
    controller = Controller(geolocator=FixedGeolocator(51.5, -0.12), log_path=log_path)

    display = controller.locate()

    assert display.state is State.SUCCESS
    assert display.view.current.place_label == "London, England, United Kingdom"
    api.reverse_geocode.assert_called_once_with(51.5, -0.12, None)
    api.fetch_weather.assert_called_once_with(51.5, -0.12, None)
    assert controller.session.last_data.place_label == "London, England, United Kingdom"


def test_locate_without_place_falls_back_to_coordinates(api, log_path):
    api.reverse_geocode.return_value = None
    controller = Controller(geolocator=FixedGeolocator(51.50735, -0.127758), log_path=log_path)

    display = controller.locate()

    assert display.state is State.SUCCESS
    assert display.view.current.place_label == "51.51, -0.13"


def test_locate_reverse_failure_is_all_or_nothing(api, log_path):
    api.reverse_geocode.side_effect = GeocodeError("bad body")
    controller = Controller(geolocator=FixedGeolocator(1.0, 2.0), log_path=log_path)

    display = controller.locate()

    assert display.state is State.ERROR
    assert display.message == MSG_GEO_FAILED
    assert display.view is None
    assert controller.session.last_data is None


def test_locate_forecast_failure_is_all_or_nothing(api, log_path):
    api.fetch_weather.side_effect = FetchError("timeout")
    controller = Controller(geolocator=FixedGeolocator(1.0, 2.0), log_path=log_path)

    display = controller.locate()

    assert display.state is State.ERROR
    assert display.message == MSG_GEO_FAILED
    assert controller.session.last_data is None


# ---------------------------------------------------------------------------
# set_unit
# ---------------------------------------------------------------------------

def test_unit_toggle_without_data_is_a_no_op(api, log_path):
    controller = Controller(log_path=log_path)
    before = controller.display

    after = controller.set_unit(True)

    assert after is before
    assert controller.session.use_fahrenheit is True
    api.fetch_weather.assert_not_called()


def test_unit_toggle_rerenders_without_network(api, log_path):
    controller = Controller(log_path=log_path)
    controller.search("Paris")
    assert controller.display.view.current.temperature == "0°C"

    display = controller.set_unit(True)

    assert display.state is State.SUCCESS
    assert display.view.current.temperature == "32°F"
    assert display.view.current.place_label == "Paris, Île-de-France, France"
    assert api.fetch_weather.call_count == 1
    assert api.geocode.call_count == 1


def test_searches_use_current_unit(api, log_path):
    controller = Controller(session=Session(use_fahrenheit=True), log_path=log_path)
    display = controller.search("Paris")
    assert display.view.current.temperature == "32°F"


def test_unit_toggle_after_error_shows_last_good_forecast(api, log_path):
    controller = Controller(log_path=log_path)
    controller.search("Paris")
    api.geocode.side_effect = NotFoundError("nope")
    controller.search("Atlantis")

    display = controller.set_unit(True)

    assert display.state is State.SUCCESS
    assert display.view.current.place_label == "Paris, Île-de-France, France"


# ---------------------------------------------------------------------------
# Concurrency and malformed geocoding data
# ---------------------------------------------------------------------------

def test_locate_runs_reverse_lookup_and_forecast_together(api, log_path):
    """Each fake blocks until the other has started; sequential calls would time out."""
    both_started = threading.Barrier(2, timeout=5)

    def reverse(lat, lon, timeout=None):
        both_started.wait()
        return Place("London, England, United Kingdom", lat, lon)

    def fetch(lat, lon, timeout=None):
        both_started.wait()
        return _make_forecast_payload()

    api.reverse_geocode.side_effect = reverse
    api.fetch_weather.side_effect = fetch
    controller = Controller(geolocator=FixedGeolocator(51.5, -0.12), log_path=log_path)

    display = controller.locate()

    assert display.state is State.SUCCESS
    assert display.view.current.place_label == "London, England, United Kingdom"


def _geocoding_body(monkeypatch, payload) -> None:
    resp = MagicMock()
    resp.ok = True
    resp.json.return_value = payload
    monkeypatch.setattr("weather_quicklook.geocode.requests.get", MagicMock(return_value=resp))


def test_search_with_null_geocoding_body_is_an_error(monkeypatch, log_path):
    _geocoding_body(monkeypatch, None)
    fetch = MagicMock(return_value=_make_forecast_payload())
    monkeypatch.setattr("weather_quicklook.controller.fetch_weather", fetch)

    display = Controller(log_path=log_path).search("Paris")

    assert display.state is State.ERROR
    assert display.message == MSG_CITY_NOT_FOUND
    fetch.assert_not_called()


def test_locate_with_incomplete_reverse_record_is_an_error(monkeypatch, log_path):
    _geocoding_body(monkeypatch, {"results": [{"name": "X"}]})
    monkeypatch.setattr(
        "weather_quicklook.controller.fetch_weather",
        MagicMock(return_value=_make_forecast_payload()),
    )
    controller = Controller(geolocator=FixedGeolocator(1.0, 2.0), log_path=log_path)

    display = controller.locate()

    assert display.state is State.ERROR
    assert display.message == MSG_GEO_FAILED
    assert controller.session.last_data is None


def test_location_denied_clears_forecast_but_keeps_cache(api, log_path):
    controller = Controller(geolocator=FixedGeolocator(1.0, 2.0, allow=False), log_path=log_path)
    controller.search("Paris")
    cached = controller.session.last_data

    display = controller.locate()

    assert display.message == MSG_GEO_DENIED
    assert display.view is None
    assert controller.session.last_data is cached
