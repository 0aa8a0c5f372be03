"""Device status reporting."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, Protocol, runtime_checkable

logger: Final = logging.getLogger(__name__)


class DeviceStatus(Enum):
    """Connection status reported by the collection manager."""

    READY = "ready"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


@runtime_checkable
class StatusListener(Protocol):
    """Receiver of device status updates."""

    def update_status(self, status: DeviceStatus) -> None: ...


class LoggingStatusListener:
    """Status listener that logs each transition and keeps the latest."""

    def __init__(self, name: str = "localweather") -> None:
        self.name = name
        self.status: DeviceStatus | None = None
        self.history: list[DeviceStatus] = []

    def update_status(self, status: DeviceStatus) -> None:
        logger.info(
            "%s status: %s → %s",
            self.name,
            self.status.value if self.status else "none",
            status.value,
        )
        self.status = status
        self.history.append(status)
