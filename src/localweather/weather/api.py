"""Weather provider client interface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .errors import ProviderError
from .models import WeatherSnapshot


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single ``fetch_current`` call.

    Exactly one of ``snapshot`` and ``error`` is set.
    """

    snapshot: WeatherSnapshot | None = None
    error: ProviderError | None = None

    def __post_init__(self) -> None:
        if (self.snapshot is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of snapshot or error")

    @property
    def ok(self) -> bool:
        """Whether the fetch returned a snapshot."""
        return self.snapshot is not None

    @classmethod
    def success(cls, snapshot: WeatherSnapshot) -> FetchResult:
        return cls(snapshot=snapshot)

    @classmethod
    def failure(cls, error: ProviderError) -> FetchResult:
        return cls(error=error)


@runtime_checkable
class WeatherApi(Protocol):
    """Protocol for clients of one named weather data source.

    Implementations never raise from ``fetch_current``; provider failures
    come back as ``FetchResult.failure``. ``last_snapshot`` only ever changes
    as a whole, and only after a successful fetch.
    """

    @property
    def source_name(self) -> str:
        """Human-readable name of the weather source."""
        ...

    @property
    def last_snapshot(self) -> WeatherSnapshot | None:
        """Snapshot from the most recent successful fetch, if any."""
        ...

    def fetch_current(self, latitude: float, longitude: float) -> FetchResult:
        """Fetch current conditions at a position.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            Snapshot on success, ProviderError on failure
        """
        ...

    def close(self) -> None:
        """Release connections held by the client."""
        ...
