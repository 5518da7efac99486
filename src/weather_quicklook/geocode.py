# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
geocode.py — Resolve place names to coordinates (and back) using Open-Meteo Geocoding API.

Free, no API key required.
API docs: https://open-meteo.com/en/docs/geocoding-api
"""

from dataclasses import dataclass

import requests

from weather_quicklook.utils import coords_label, nice_place_name

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
REVERSE_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/reverse"


class NotFoundError(ValueError):
    """Raised when a place name cannot be resolved to coordinates."""


class GeocodeError(RuntimeError):
    """Raised when a reverse lookup returns a response that cannot be read."""


@dataclass(frozen=True)
class Place:
    display_name: str
    latitude: float
    longitude: float

    @classmethod
    def from_result(cls, result: dict) -> "Place":
        """Build a Place from one Open-Meteo geocoding result record."""
        return cls(
            display_name=nice_place_name(
                result.get("name"), result.get("admin1"), result.get("country")
            ),
            latitude=result["latitude"],
            longitude=result["longitude"],
        )

    @classmethod
    def from_coords(cls, latitude: float, longitude: float) -> "Place":
        """Build a Place labelled only by its rounded coordinates."""
        return cls(coords_label(latitude, longitude), latitude, longitude)


def geocode(place: str, timeout: float | None = None) -> Place:
    """Look up coordinates for a place name using Open-Meteo Geocoding.

    Args:
        place: Human-readable place name, e.g. 'Tokyo' or 'Paris'.
        timeout: Seconds to wait for the API. None waits indefinitely.

    Returns:
        The first (and only requested) match as a Place with a canonical
        'City, Region, Country' display name.

    Raises:
        NotFoundError: If the request fails, no results are found or the
            response is not a usable geocoding record.
    """
    params = {
        "name": place,
        "count": 1,
        "language": "en",
        "format": "json",
    }

    try:
        r = requests.get(GEOCODING_URL, params=params, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except (requests.RequestException, ValueError) as e:
        raise NotFoundError(f'Geocoding failed for "{place}": {e}') from e

    if not isinstance(data, dict):
        raise NotFoundError(f'Unexpected geocoding response for "{place}"')

    results = data.get("results")
    if not results:
        raise NotFoundError(f'Location "{place}" not found. Try a more specific name.')

    try:
        return Place.from_result(results[0])
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise NotFoundError(f'Incomplete geocoding result for "{place}": {e!r}') from e


def reverse_geocode(
    latitude: float,
    longitude: float,
    timeout: float | None = None,
) -> Place | None:
    """Find the nearest named place for a pair of coordinates.

    A missing answer is not an error here: callers fall back to a label
    built from the raw coordinates (see Place.from_coords).

    Args:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        timeout: Seconds to wait for the API. None waits indefinitely.

    Returns:
        The nearest Place, or None if the API is unreachable, answers with a
        non-success status or has no match.

    Raises:
        GeocodeError: If the API answers 2xx with a body that is not a JSON
            object, or whose first record lacks coordinates.
    """
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "language": "en",
        "format": "json",
    }

    try:
        r = requests.get(REVERSE_GEOCODING_URL, params=params, timeout=timeout)
    except requests.RequestException:
        return None
    if not r.ok:
        return None

    try:
        data = r.json()
    except ValueError as e:
        raise GeocodeError(f"Unreadable reverse geocoding response: {e}") from e

    if not isinstance(data, dict):
        raise GeocodeError(f"Unexpected reverse geocoding response: {data!r}")

    results = data.get("results")
    if not results:
        return None
    try:
        return Place.from_result(results[0])
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise GeocodeError(f"Incomplete reverse geocoding result: {e!r}") from e
