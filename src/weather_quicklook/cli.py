# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
cli.py — Command-line interface for weather-quicklook.

We use argparse (stdlib) rather than click because:
- No extra dependency to install
- Sufficient for 3 simple subcommands
- Easier for beginners to read and understand

Commands:
  weather-quicklook search CITY      — current conditions + 7-day forecast for a city
  weather-quicklook here             — same, for this machine's location
  weather-quicklook interactive      — prompt loop with a °C/°F toggle
"""

import argparse
from pathlib import Path

from weather_quicklook.chart import render_view
from weather_quicklook.config import load_config
from weather_quicklook.controller import Controller, Display, State
from weather_quicklook.geolocation import FixedGeolocator, geolocator_from_config

INTERACTIVE_HELP = """Commands:
  search <city>   forecast for a city
  here            forecast for your location
  unit c|f        switch between °C and °F
  help            show this help
  quit            exit"""


def _print_progress(display: Display) -> None:
    if display.state is State.LOADING:
        print(f"[weather] {display.message}")


def build_controller(args) -> Controller:
    """Create a Controller from the config file and command-line overrides."""
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"[config] {e}")
        raise SystemExit(1)

    lat = getattr(args, "lat", None)
    lon = getattr(args, "lon", None)
    if lat is not None and lon is not None:
        geolocator = FixedGeolocator(lat, lon)
    else:
        geolocator = geolocator_from_config(config)

    controller = Controller(
        geolocator=geolocator,
        timeout=config["http"]["timeout"] or None,
        log_path=Path(config["log"]["path"]),
        on_change=_print_progress,
    )
    controller.session.use_fahrenheit = (
        config["units"]["fahrenheit"] or getattr(args, "fahrenheit", False)
    )
    return controller


def show(display: Display) -> bool:
    """Print a Display. Returns False if it is an error."""
    if display.state is State.SUCCESS:
        print()
        print(render_view(display.view))
        return True
    if display.state is State.ERROR:
        print(f"[error] {display.message}")
        return False
    return True


def cmd_search(args) -> None:
    """Fetch and print the forecast for a city name."""
    controller = build_controller(args)
    display = controller.search(args.city)
    if display.state is State.IDLE:
        print("[weather] Nothing to search for. Give a city name.")
        return
    if not show(display):
        raise SystemExit(1)


def cmd_here(args) -> None:
    """Fetch and print the forecast for the current location."""
    if (args.lat is None) != (args.lon is None):
        print("[error] --lat and --lon must be given together.")
        raise SystemExit(2)
    controller = build_controller(args)
    if not show(controller.locate()):
        raise SystemExit(1)


def cmd_interactive(args) -> None:
    """Read commands from stdin until 'quit' or end of input."""
    controller = build_controller(args)
    print(INTERACTIVE_HELP)

    while True:
        try:
            line = input("weather> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        command, _, rest = line.partition(" ")
        command = command.lower()

        if not command:
            continue
        if command in ("quit", "exit", "q"):
            break
        if command == "help":
            print(INTERACTIVE_HELP)
        elif command == "search":
            if not rest.strip():
                print("[weather] Usage: search <city>")
                continue
            show(controller.search(rest))
        elif command == "here":
            show(controller.locate())
        elif command == "unit":
            choice = rest.strip().lower()
            if choice not in ("c", "f"):
                print("[weather] Usage: unit c|f")
                continue
            before = controller.display
            after = controller.set_unit(choice == "f")
            if after is before:
                print(f"[weather] Unit set to °{choice.upper()}.")
            else:
                show(after)
        else:
            print(f"[weather] Unknown command: {command!r}. Type 'help'.")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="weather-quicklook",
        description="Current conditions and 7-day forecast from Open-Meteo (no API key needed)",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        default=None,
        help="Path to a TOML config file (default: ./config.toml if present)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    p_search = subparsers.add_parser("search", help="Forecast for a city name")
    p_search.add_argument("city", help='City to look up, e.g. "Paris" or "Tokyo"')
    p_search.add_argument("--fahrenheit", "-f", action="store_true", help="Show °F instead of °C")

    p_here = subparsers.add_parser("here", help="Forecast for your current location")
    p_here.add_argument("--lat", type=float, default=None, help="Latitude to use instead of detecting it")
    p_here.add_argument("--lon", type=float, default=None, help="Longitude to use instead of detecting it")
    p_here.add_argument("--fahrenheit", "-f", action="store_true", help="Show °F instead of °C")

    p_interactive = subparsers.add_parser("interactive", help="Interactive prompt with unit toggle")
    p_interactive.add_argument("--fahrenheit", "-f", action="store_true", help="Start in °F")

    args = parser.parse_args(argv)

    commands = {
        "search": cmd_search,
        "here": cmd_here,
        "interactive": cmd_interactive,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
