# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
view.py — Turn a raw forecast response into display-ready strings.

build_view() is pure: same response, label and unit always give the same
ForecastView, so the unit toggle just calls it again on cached data.
"""

from dataclasses import dataclass

from weather_quicklook.codes import code_to_info
from weather_quicklook.utils import day_name, fmt_precip, fmt_temp, fmt_timestamp
from weather_quicklook.weather import parse_current, parse_daily


@dataclass(frozen=True)
class CurrentView:
    place_label: str
    icon: str
    condition: str
    subtitle: str
    temperature: str


@dataclass(frozen=True)
class DayView:
    date: str
    weekday: str
    icon: str
    condition: str
    temp_min: str
    temp_max: str
    precipitation: str


@dataclass(frozen=True)
class ForecastView:
    current: CurrentView
    days: tuple[DayView, ...]
    fahrenheit: bool = False


def build_view(data: dict, place_label: str, fahrenheit: bool = False) -> ForecastView:
    """Build the current-conditions card and one row per forecast day.

    Args:
        data: Raw Open-Meteo response from fetch_weather.
        place_label: Display name of the location.
        fahrenheit: Unit preference for every temperature string.

    Returns:
        ForecastView with exactly one DayView per entry of the daily arrays,
        in the API's order.
    """
    cw = parse_current(data)
    info = code_to_info(cw.weathercode)
    current = CurrentView(
        place_label=place_label,
        icon=info.icon,
        condition=info.label,
        subtitle=fmt_timestamp(cw.time),
        temperature=fmt_temp(cw.temperature, fahrenheit),
    )

    days = []
    for day in parse_daily(data):
        day_info = code_to_info(day.weathercode)
        days.append(DayView(
            date=day.date,
            weekday=day_name(day.date),
            icon=day_info.icon,
            condition=day_info.label,
            temp_min=fmt_temp(day.temp_min, fahrenheit),
            temp_max=fmt_temp(day.temp_max, fahrenheit),
            precipitation=fmt_precip(day.precip_mm),
        ))

    return ForecastView(current=current, days=tuple(days), fahrenheit=fahrenheit)
