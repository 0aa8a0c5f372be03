"""Application settings management.

This package provides:
- UserSettings: User-configurable settings loaded from config.yaml
"""

from localweather.settings.user import UserSettings

__all__ = ["UserSettings"]
