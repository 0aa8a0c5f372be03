"""Location package - position providers and the ranked location source."""

from .models import LocationType, Position, classify_provider
from .providers import (
    FixedPositionProvider,
    IpGeolocationProvider,
    LocationManager,
    PositionProvider,
)
from .source import RANKED_PROVIDERS, LocationSource

__all__ = [
    "FixedPositionProvider",
    "IpGeolocationProvider",
    "LocationManager",
    "LocationSource",
    "LocationType",
    "Position",
    "PositionProvider",
    "RANKED_PROVIDERS",
    "classify_provider",
]
