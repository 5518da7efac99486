# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
utils.py — Shared utilities: temperature/date/place formatting and failure logging.
"""

import math
from datetime import date, datetime
from pathlib import Path

DEFAULT_LOG_PATH = Path("logs/weather_quicklook.log")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always going up (2.5 → 3, -2.5 → -2)."""
    return math.floor(value + 0.5)


def c_to_f(celsius: float) -> float:
    """Convert degrees Celsius to degrees Fahrenheit."""
    return celsius * 9 / 5 + 32


def fmt_temp(celsius: float | None, fahrenheit: bool = False) -> str:
    """Format a Celsius temperature for display in the selected unit.

    Args:
        celsius: Temperature in °C, as returned by Open-Meteo. None (a gap in
            the model data) is shown as '--'.
        fahrenheit: True to convert and show °F, False to show °C.

    Returns:
        Rounded label such as '21°C' or '70°F'.
    """
    unit = "°F" if fahrenheit else "°C"
    if celsius is None:
        return f"--{unit}"
    if fahrenheit:
        celsius = c_to_f(celsius)
    return f"{round_half_up(celsius)}{unit}"


def fmt_precip(mm: float | None) -> str:
    """Format a precipitation sum as whole millimetres, e.g. '3 mm'.

    None (missing data) is shown as '0 mm'; fmt_temp shows '--' instead, as
    0° would read as a real reading.
    """
    return f"{round_half_up(mm or 0)} mm"


def day_name(date_str: str) -> str:
    """Return the abbreviated weekday name for a calendar date.

    The date is read as a plain calendar date (no time of day, no timezone),
    so '2024-03-04' is always a Monday regardless of the machine's UTC offset.

    Args:
        date_str: Date in 'YYYY-MM-DD' format.

    Returns:
        Locale weekday abbreviation, e.g. 'Mon'.
    """
    return date.fromisoformat(date_str).strftime("%a")


def fmt_timestamp(time_str: str) -> str:
    """Format an ISO local time as a medium date plus short time.

    The field order is fixed (day month year, 24-hour clock); only the month
    abbreviation follows the process locale. '%x'/'%X' would give '03/04/24'
    under the default C locale.

    Args:
        time_str: Datetime in 'YYYY-MM-DDTHH:MM' format (location's local time).

    Returns:
        Formatted string like '04 Mar 2024, 15:00'.
    """
    dt = datetime.fromisoformat(time_str)
    return dt.strftime("%d %b %Y, %H:%M")


def nice_place_name(
    name: str | None,
    admin1: str | None = None,
    country: str | None = None,
) -> str:
    """Build a 'City, Region, Country' label without blanks or repeats.

    Parts are trimmed, empty or missing parts are dropped and a part that
    exactly repeats an earlier one is skipped (e.g. Tokyo, Tokyo, Japan →
    'Tokyo, Japan').
    """
    seen: list[str] = []
    for part in (name, admin1, country):
        if part is None:
            continue
        text = str(part).strip()
        if text and text not in seen:
            seen.append(text)
    return ", ".join(seen)


def coords_label(latitude: float, longitude: float) -> str:
    """Fallback place label built from raw coordinates, e.g. '51.51, -0.13'."""
    return f"{latitude:.2f}, {longitude:.2f}"


def log_error(message: str, log_path: Path = DEFAULT_LOG_PATH) -> None:
    """Append a timestamped ERROR line to the log file.

    Args:
        message: Error description to log.
        log_path: Destination log file path.
    """
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(log_path, "a") as f:
            f.write(f"{timestamp} [ERROR] {message}\n")
    except OSError:
        pass  # Never crash on logging failure
