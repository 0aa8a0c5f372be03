# src/localweather/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

import time
from datetime import UTC, datetime


class TimeUtils:
    """Time-related utility functions.

    Observation records carry times as epoch seconds; these helpers keep
    conversions between epoch values and aware datetimes in one place.
    """

    @staticmethod
    def now_epoch() -> float:
        """Get the current wall-clock time in epoch seconds.

        Returns:
            Seconds since the epoch, with sub-second precision
        """
        return time.time()

    @staticmethod
    def epoch_to_datetime(timestamp: float) -> datetime:
        """Convert UNIX timestamp to UTC datetime with timezone information.

        Args:
            timestamp: UNIX timestamp (seconds since epoch)

        Returns:
            Timezone-aware datetime object in UTC
        """
        return datetime.fromtimestamp(timestamp, tz=UTC)

    @staticmethod
    def format_epoch(timestamp: float, format_string: str = "%Y-%m-%d %H:%M:%S %Z") -> str:
        """Format an epoch timestamp as a UTC string for log output."""
        return TimeUtils.epoch_to_datetime(timestamp).strftime(format_string)
