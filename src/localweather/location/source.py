"""Best available last known location for a collection cycle."""

from __future__ import annotations

import logging
from typing import Final, Protocol

from localweather.constants import GPS_PROVIDER, NETWORK_PROVIDER

from .models import Position

logger: Final = logging.getLogger(__name__)

RANKED_PROVIDERS: Final = (GPS_PROVIDER, NETWORK_PROVIDER)


class LocationSystem(Protocol):
    """Anything that can read a last known position per provider id."""

    def last_known_position(self, provider_id: str) -> Position | None: ...


class LocationSource:
    """Reads the last known location from ranked providers.

    GPS is tried first, then network. The position could be outdated if
    the device was turned off and moved since the last fix.
    """

    def __init__(
        self,
        location_system: LocationSystem,
        providers: tuple[str, ...] = RANKED_PROVIDERS,
    ) -> None:
        self.location_system = location_system
        self.providers = providers

    def last_known_location(self) -> Position | None:
        """Get the best last known location.

        Returns:
            Position, or None if no provider has a fix or access is denied
        """
        try:
            for provider_id in self.providers:
                position = self.location_system.last_known_position(provider_id)
                if position is not None:
                    return position
        except PermissionError as exc:
            logger.warning("Location access denied: %s", exc)
        return None
