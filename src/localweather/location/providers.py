"""Position providers and the location system that dispatches to them."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Dict, Final, Protocol, runtime_checkable

import requests
from requests.exceptions import RequestException
from typing_extensions import TypedDict

from .models import Position

logger: Final = logging.getLogger(__name__)

DEFAULT_GEOLOCATION_URL: Final = "http://ip-api.com/json"


class GeolocationResponse(TypedDict, total=False):
    """Response structure of the IP geolocation endpoint."""

    status: str
    lat: float
    lon: float
    city: str


@runtime_checkable
class PositionProvider(Protocol):
    """Protocol for sources of a last known position."""

    def last_known_position(self) -> tuple[float, float] | None:
        """Return the last known (latitude, longitude), if any.

        May raise PermissionError when location access is denied.
        """
        ...


class FixedPositionProvider:
    """Provider for a device installed at a known, surveyed position."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self.latitude = latitude
        self.longitude = longitude

    def last_known_position(self) -> tuple[float, float] | None:
        return self.latitude, self.longitude


class IpGeolocationProvider:
    """Coarse position from an HTTP IP geolocation lookup."""

    def __init__(self, url: str = DEFAULT_GEOLOCATION_URL, timeout: float = 5.0) -> None:
        """Initialize with the lookup URL.

        Args:
            url: Endpoint returning ``{"status": "success", "lat": .., "lon": ..}``
            timeout: Timeout for HTTP request in seconds
        """
        parsed = urllib.parse.urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid URL: {url}")

        self.url = url
        self.timeout = timeout

    def last_known_position(self) -> tuple[float, float] | None:
        """Look up the position of the device's public IP address.

        Returns:
            (latitude, longitude), or None if the lookup failed
        """
        try:
            resp = requests.get(self.url, timeout=self.timeout)
            if resp.status_code != 200:
                logger.debug("geolocation: HTTP %s from %s", resp.status_code, self.url)
                return None

            data: GeolocationResponse = resp.json()  # type: ignore[assignment]
        except (ValueError, RequestException) as exc:  # JSON parse / network error
            logger.debug("geolocation: request failed (%s)", exc)
            return None

        if not isinstance(data, dict):
            logger.debug("geolocation: unexpected response body %r", data)
            return None
        if data.get("status", "success") != "success":
            logger.debug("geolocation: lookup status %s", data.get("status"))
            return None
        try:
            return float(data["lat"]), float(data["lon"])
        except (KeyError, TypeError, ValueError):
            logger.debug("geolocation: no coordinates in response")
            return None


class LocationManager:
    """Location system holding position providers by id."""

    def __init__(self, providers: Dict[str, PositionProvider] | None = None) -> None:
        self._providers: Dict[str, PositionProvider] = dict(providers or {})

    def add_provider(self, provider_id: str, provider: PositionProvider) -> None:
        self._providers[provider_id] = provider

    @property
    def provider_ids(self) -> list[str]:
        return list(self._providers.keys())

    def last_known_position(self, provider_id: str) -> Position | None:
        """Read the last known position of one provider.

        Args:
            provider_id: Id the provider was registered under

        Returns:
            Position tagged with ``provider_id``, or None if the provider is
            unknown or has no fix

        Raises:
            PermissionError: If the provider denies location access
        """
        provider = self._providers.get(provider_id)
        if provider is None:
            return None
        fix = provider.last_known_position()
        if fix is None:
            return None
        latitude, longitude = fix
        return Position(latitude=latitude, longitude=longitude, provider=provider_id)
