# src/localweather/system/__init__.py
"""System module for device status reporting."""

from localweather.system.status import DeviceStatus, LoggingStatusListener, StatusListener

__all__ = [
    "DeviceStatus",
    "LoggingStatusListener",
    "StatusListener",
]
