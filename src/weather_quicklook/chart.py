# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
chart.py — Terminal rendering for a ForecastView.

Uses only the Python standard library.
All rendering functions return strings ready to print.
"""

from weather_quicklook.view import ForecastView

SEPARATOR_WIDTH: int = 52


def render_current(view: ForecastView) -> str:
    """Render the current-conditions card.

    Example::

        ☀️  Paris, Île-de-France, France                 21°C
            Clear sky • 04 Mar 2024, 15:00
    """
    cur = view.current
    title = f"{cur.icon}  {cur.place_label}"
    pad = max(1, SEPARATOR_WIDTH - len(title) - len(cur.temperature))
    return "\n".join([
        f"{title}{' ' * pad}{cur.temperature}",
        f"    {cur.condition} • {cur.subtitle}",
    ])


def render_daily_table(view: ForecastView) -> str:
    """Render the daily outlook as a fixed-width table.

    Args:
        view: ForecastView from build_view.

    Returns:
        Multi-line string containing the formatted table.
    """
    unit = "°F" if view.fahrenheit else "°C"
    sep = "─" * SEPARATOR_WIDTH

    header_row = "  ".join([
        "Day ",
        "   ",
        f"{'Min' + unit:>6}",
        f"{'Max' + unit:>6}",
        f"{'Precip':>7}",
        "Conditions",
    ])
    lines = [f"{len(view.days)}-day forecast", sep, header_row, sep]

    for d in view.days:
        lines.append("  ".join([
            f"{d.weekday:<4}",
            d.icon,
            f"{d.temp_min:>6}",
            f"{d.temp_max:>6}",
            f"{d.precipitation:>7}",
            d.condition,
        ]))

    lines.append(sep)
    return "\n".join(lines)


def render_view(view: ForecastView) -> str:
    """Render the current card followed by the daily table."""
    return f"{render_current(view)}\n\n{render_daily_table(view)}"
