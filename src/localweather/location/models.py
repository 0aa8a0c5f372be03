"""Position data and location provenance."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from localweather.constants import GPS_PROVIDER, NETWORK_PROVIDER


class LocationType(str, Enum):
    """How the position used for an observation was derived."""

    GPS = "GPS"
    NETWORK = "NETWORK"
    OTHER = "OTHER"


def classify_provider(provider: str) -> LocationType:
    """Classify a location provider id.

    Args:
        provider: Id of the provider that supplied a fix

    Returns:
        GPS or NETWORK for the ranked providers, OTHER for anything else
    """
    if provider == GPS_PROVIDER:
        return LocationType.GPS
    if provider == NETWORK_PROVIDER:
        return LocationType.NETWORK
    return LocationType.OTHER


@dataclass(frozen=True)
class Position:
    """A location fix read from one provider."""

    latitude: float
    longitude: float
    provider: str

    @property
    def location_type(self) -> LocationType:
        return classify_provider(self.provider)
