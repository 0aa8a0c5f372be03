"""Common utility functions and helpers for the localweather package."""

from localweather.utils.file import ensure_directory_exists
from localweather.utils.time import TimeUtils

__all__ = [
    "TimeUtils",
    "ensure_directory_exists",
]
