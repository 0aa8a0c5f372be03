"""Scheduler interface consumed by the collection manager."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class JobScheduler(Protocol):
    """Periodic trigger for a single job.

    Implementations must never run the job concurrently with itself.
    """

    def register(
        self,
        interval_seconds: float,
        job: Callable[[], object],
        persist_across_restart: bool = True,
    ) -> None: ...

    def start(self) -> None: ...

    def set_interval(self, interval_seconds: float) -> None: ...

    def stop(self) -> None: ...

    def close(self) -> None: ...
