# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
config.py — Load and validate the optional TOML configuration file.

We use tomllib (Python 3.11+ stdlib) so no extra install is needed.
The tool works without any config: if no path is given and there is no
config.toml in the current working directory, DEFAULT_CONFIG is used.
Values from a file are merged over the defaults section by section.
"""

import copy
import tomllib
from pathlib import Path


DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULT_CONFIG: dict = {
    "units": {"fahrenheit": False},
    "geolocation": {"provider": "ip", "allow": True},
    "http": {"timeout": 0},
    "log": {"path": "logs/weather_quicklook.log"},
}

GEOLOCATION_PROVIDERS = ("ip", "fixed", "none")


def load_config(path: Path | None = None) -> dict:
    """Load and validate a TOML configuration file.

    Args:
        path: Path to the TOML config file. None means config.toml in the
            working directory if it exists, otherwise the built-in defaults.

    Returns:
        Nested dict of configuration values, defaults filled in.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ValueError: If a key has the wrong type or value.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return config
        path = DEFAULT_CONFIG_PATH
    elif not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Copy config.toml.example to config.toml and adjust it."
        )

    with open(path, "rb") as f:
        loaded = tomllib.load(f)

    for section, values in loaded.items():
        if not isinstance(values, dict):
            raise ValueError(f"Config entry '{section}' must be a [section]")
        config.setdefault(section, {}).update(values)

    _validate(config)
    return config


def _validate(config: dict) -> None:
    """Validate the merged config.

    Expected config schema::

        [units]
        fahrenheit = <bool>    # start in °F instead of °C

        [geolocation]
        provider  = <str>      # "ip", "fixed" or "none"
        allow     = <bool>     # false → location access is always denied
        latitude  = <float>    # required when provider = "fixed"
        longitude = <float>

        [http]
        timeout = <number>     # seconds, 0 = wait indefinitely

        [log]
        path = <str>           # relative or absolute path to the log file

    Args:
        config: Merged config dict.

    Raises:
        ValueError: If any key is missing, mistyped or out of range.
    """
    if not isinstance(config["units"].get("fahrenheit"), bool):
        raise ValueError("Config key [units].fahrenheit must be true or false")

    geo = config["geolocation"]
    provider = geo.get("provider")
    if provider not in GEOLOCATION_PROVIDERS:
        raise ValueError(
            f"Config key [geolocation].provider must be one of "
            f"{', '.join(GEOLOCATION_PROVIDERS)} (got {provider!r})"
        )
    if not isinstance(geo.get("allow", True), bool):
        raise ValueError("Config key [geolocation].allow must be true or false")
    if provider == "fixed":
        for key in ("latitude", "longitude"):
            if key not in geo:
                raise ValueError(f"Missing required config key: [geolocation].{key}")
            if not isinstance(geo[key], (int, float)) or isinstance(geo[key], bool):
                raise ValueError(f"Config key [geolocation].{key} must be a number")

    timeout = config["http"].get("timeout")
    if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout < 0:
        raise ValueError("Config key [http].timeout must be a number >= 0")

    if not isinstance(config["log"].get("path"), str):
        raise ValueError("Missing required config key: [log].path")
