# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
weather.py — Fetch current conditions and a 7-day daily forecast from Open-Meteo.

Open-Meteo is free and requires no API key. A single request returns the
current_weather block plus parallel daily arrays (one entry per day, all the
same length). The raw JSON is kept as-is so a unit change can re-render it
without another request; parse_current / parse_daily give typed views of it.

API docs: https://open-meteo.com/en/docs
"""

from dataclasses import dataclass

import requests

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

# Fields we care about from the daily forecast
DAILY_VARIABLES = [
    "weathercode",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
]


class FetchError(RuntimeError):
    """Raised when the forecast API cannot be reached or answers with an error."""


@dataclass(frozen=True)
class CurrentConditions:
    time: str
    temperature: float
    weathercode: int


@dataclass(frozen=True)
class DailyForecastEntry:
    date: str
    temp_min: float
    temp_max: float
    precip_mm: float
    weathercode: int


def fetch_weather(
    latitude: float,
    longitude: float,
    timeout: float | None = None,
) -> dict:
    """Fetch current conditions and daily aggregates from Open-Meteo.

    Args:
        latitude: Location latitude in decimal degrees.
        longitude: Location longitude in decimal degrees.
        timeout: Seconds to wait for the API. None waits indefinitely.

    Returns:
        Raw JSON response with 'current_weather' and 'daily' blocks.

    Raises:
        FetchError: If the request fails or returns a non-success status.
    """
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "daily": ",".join(DAILY_VARIABLES),
        "current_weather": "true",
        "timezone": "auto",
    }

    try:
        r = requests.get(OPEN_METEO_URL, params=params, timeout=timeout)
        r.raise_for_status()
        return r.json()
    except (requests.RequestException, ValueError) as e:
        raise FetchError(f"Weather fetch failed: {e}") from e


def parse_current(data: dict) -> CurrentConditions:
    """Extract the current_weather block of a forecast response."""
    cw = data["current_weather"]
    return CurrentConditions(
        time=cw["time"],
        temperature=cw["temperature"],
        weathercode=cw["weathercode"],
    )


def parse_daily(data: dict) -> list[DailyForecastEntry]:
    """Zip the parallel daily arrays into one entry per day.

    Entries keep the API's chronological order; none are dropped.
    """
    daily = data["daily"]
    dates = daily["time"]
    codes = daily["weathercode"]
    temp_max = daily["temperature_2m_max"]
    temp_min = daily["temperature_2m_min"]
    precip = daily["precipitation_sum"]

    result = []
    for i, date_str in enumerate(dates):
        result.append(DailyForecastEntry(
            date=date_str,
            temp_min=temp_min[i],
            temp_max=temp_max[i],
            precip_mm=precip[i],
            weathercode=codes[i],
        ))
    return result
