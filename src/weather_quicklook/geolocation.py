# Project: weather-quicklook
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
geolocation.py — Where is "here"? Device-location adapters.

A geolocator has one method, locate(), returning (latitude, longitude) or
raising PermissionDenied. When no geolocator is configured at all the
controller reports the capability as unavailable.

Providers:
  fixed — coordinates from config.toml or the command line
  ip    — approximate coordinates for the current public IP (ipapi.co)
"""

import requests

IP_LOOKUP_URL = "https://ipapi.co/json/"


class CapabilityUnavailable(RuntimeError):
    """Raised when no way of locating the device is available."""


class PermissionDenied(PermissionError):
    """Raised when locating the device is refused or fails."""


class FixedGeolocator:
    """Always reports the same coordinates."""

    def __init__(self, latitude: float, longitude: float, allow: bool = True):
        self.latitude = latitude
        self.longitude = longitude
        self.allow = allow

    def locate(self) -> tuple[float, float]:
        if not self.allow:
            raise PermissionDenied("Location access denied.")
        return self.latitude, self.longitude


class IPGeolocator:
    """Approximate location of the current public IP address."""

    def __init__(self, timeout: float | None = None, allow: bool = True):
        self.timeout = timeout
        self.allow = allow

    def locate(self) -> tuple[float, float]:
        """Ask ipapi.co for this machine's approximate coordinates.

        Raises:
            PermissionDenied: If location access is disabled or the lookup
                fails or returns no coordinates.
        """
        if not self.allow:
            raise PermissionDenied("Location access denied.")
        try:
            r = requests.get(IP_LOOKUP_URL, timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
            return float(data["latitude"]), float(data["longitude"])
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            raise PermissionDenied(f"Could not determine location: {e}") from e


def geolocator_from_config(config: dict) -> FixedGeolocator | IPGeolocator | None:
    """Build the geolocator described by the [geolocation] config section.

    Returns:
        A geolocator, or None when provider = "none".
    """
    geo = config["geolocation"]
    provider = geo["provider"]
    allow = geo.get("allow", True)

    if provider == "fixed":
        return FixedGeolocator(geo["latitude"], geo["longitude"], allow=allow)
    if provider == "ip":
        timeout = config["http"]["timeout"] or None
        return IPGeolocator(timeout=timeout, allow=allow)
    return None
