# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
codes.py — Map WMO weather codes to a short label and an emoji icon.

Open-Meteo reports conditions as WMO codes (0 = clear sky, 95 = thunderstorm, ...).
Several codes share one label, so the table is a list of (codes, info) rows
scanned in order.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherCodeInfo:
    label: str
    icon: str


WEATHER_MAP: list[tuple[frozenset[int], WeatherCodeInfo]] = [
    (frozenset({0}),                       WeatherCodeInfo("Clear sky", "☀️")),
    (frozenset({1, 2, 3}),                 WeatherCodeInfo("Partly cloudy", "🌤️")),
    (frozenset({45, 48}),                  WeatherCodeInfo("Fog", "🌫️")),
    (frozenset({51, 53, 55}),              WeatherCodeInfo("Drizzle", "🌦️")),
    (frozenset({56, 57, 66, 67}),          WeatherCodeInfo("Freezing rain", "🧊")),
    (frozenset({61, 63, 65, 80, 81, 82}),  WeatherCodeInfo("Rain", "🌧️")),
    (frozenset({71, 73, 75, 77, 85, 86}),  WeatherCodeInfo("Snow", "❄️")),
    (frozenset({95, 96, 99}),              WeatherCodeInfo("Thunderstorm", "⛈️")),
]

UNKNOWN = WeatherCodeInfo("Unknown", "❔")


def code_to_info(code: int | None) -> WeatherCodeInfo:
    """Return the label and icon for an Open-Meteo weather code.

    Args:
        code: WMO weather code as reported by the API. May be None.

    Returns:
        The first matching WeatherCodeInfo, or UNKNOWN if no row contains
        the code.
    """
    for codes, info in WEATHER_MAP:
        if code in codes:
            return info
    return UNKNOWN
