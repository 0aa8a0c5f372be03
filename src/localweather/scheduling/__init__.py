"""Scheduler package for the local weather collector."""

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Final

from localweather.scheduling.models import SchedulerState
from localweather.scheduling.protocols import JobScheduler
from localweather.utils.time import TimeUtils

logger: Final = logging.getLogger(__name__)

__all__ = [
    "IntervalScheduler",
    "JobScheduler",
    "SchedulerState",
]


class IntervalScheduler:
    """Fires one registered job roughly once per interval.

    A single daemon worker thread waits until the job is due, runs it and
    records when it fired. Runs are serialized: a trigger that comes due
    while the job is still running fires once after it completes.

    With ``persist_across_restart`` and a ``state_file``, the time of the
    last run is stored after every run and loaded on registration, so a
    restarted process keeps the cadence instead of firing straight away.
    Without a previous run the job is due as soon as the scheduler starts.
    """

    def __init__(
        self,
        state_file: Path | None = None,
        clock: Callable[[], float] = TimeUtils.now_epoch,
        join_timeout: float = 5.0,
    ) -> None:
        self.state_file = state_file
        self.clock = clock
        self.join_timeout = join_timeout

        self._cond = threading.Condition()
        self._run_lock = threading.Lock()
        self._job: Callable[[], object] | None = None
        self._interval: float | None = None
        self._persist = False
        self._last_fired: float | None = None
        self._thread: threading.Thread | None = None
        self._stopped = False
        self._generation = 0

    # ---- registration ----
    def register(
        self,
        interval_seconds: float,
        job: Callable[[], object],
        persist_across_restart: bool = True,
    ) -> None:
        """Register the job to run every ``interval_seconds``."""
        if interval_seconds <= 0:
            raise ValueError(f"Interval must be positive, got {interval_seconds}")

        with self._cond:
            self._job = job
            self._interval = float(interval_seconds)
            self._persist = persist_across_restart and self.state_file is not None
            if self._persist and self.state_file is not None:
                self._last_fired = SchedulerState.load(self.state_file).last_fired
            self._cond.notify_all()

        logger.debug(
            "Registered job every %ss (persisted: %s, last fired: %s)",
            self._interval,
            self._persist,
            self._last_fired,
        )

    @property
    def interval(self) -> float | None:
        return self._interval

    @property
    def last_fired(self) -> float | None:
        return self._last_fired

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def set_interval(self, interval_seconds: float) -> None:
        """Replace the interval; takes effect when the next due time is computed."""
        if interval_seconds <= 0:
            raise ValueError(f"Interval must be positive, got {interval_seconds}")

        with self._cond:
            if self._interval == float(interval_seconds):
                return
            self._interval = float(interval_seconds)
            self._cond.notify_all()
        logger.info("Scheduler interval set to %ss", interval_seconds)

    def next_due(self, now: float | None = None) -> float | None:
        """Time the job is next due, or None if nothing is registered."""
        with self._cond:
            return self._next_due_locked(self.clock() if now is None else now)

    def _next_due_locked(self, now: float) -> float | None:
        if self._job is None or self._interval is None:
            return None
        if self._last_fired is None:
            return now
        return self._last_fired + self._interval

    # ---- triggering ----
    def tick(self, now: float | None = None) -> bool:
        """Run the job if it is due.

        Args:
            now: Current time in epoch seconds (default: the scheduler clock)

        Returns:
            True if the job ran
        """
        now = self.clock() if now is None else now
        with self._cond:
            if self._stopped:
                return False
            job = self._job
            due = self._next_due_locked(now)
            if job is None or due is None or now < due:
                return False
            # Cadence is anchored on trigger time, not completion time
            self._last_fired = now
            self._save_state_locked()
            next_due = now + (self._interval or 0)

        with self._run_lock:
            try:
                job()
            except Exception:
                logger.exception("Scheduled job failed; keeping schedule")
        logger.debug("Next run due at %s", TimeUtils.format_epoch(next_due))
        return True

    def _save_state_locked(self) -> None:
        if not self._persist or self.state_file is None:
            return
        try:
            SchedulerState(last_fired=self._last_fired).save(self.state_file)
        except OSError as exc:
            logger.warning("Could not persist scheduler state to %s: %s", self.state_file, exc)

    # ---- lifecycle ----
    def start(self) -> None:
        """Start the worker thread; a second call while running is a no-op."""
        with self._cond:
            if self._job is None:
                raise RuntimeError("No job registered with the scheduler")
            if self._thread is not None and self._thread.is_alive():
                logger.debug("Scheduler already running")
                return
            self._stopped = False
            self._generation += 1
            self._thread = threading.Thread(
                target=self._loop,
                args=(self._generation,),
                name="localweather-scheduler",
                daemon=True,
            )
            self._thread.start()
        logger.info("Scheduler started with interval of %s seconds", self._interval)

    def _loop(self, generation: int) -> None:
        # A worker left behind by stop() exits once its generation is stale
        while True:
            with self._cond:
                if self._stopped or generation != self._generation:
                    return
                now = self.clock()
                due = self._next_due_locked(now)
                if due is None or now < due:
                    self._cond.wait(timeout=None if due is None else due - now)
                    continue
            self.tick()

    def stop(self) -> None:
        """Stop future triggers. A run in progress is allowed to finish."""
        with self._cond:
            self._stopped = True
            self._generation += 1
            thread = self._thread
            self._thread = None
            self._cond.notify_all()

        if thread is not None and thread is not threading.current_thread():
            thread.join(self.join_timeout)
            logger.info("Scheduler stopped")

    def close(self) -> None:
        self.stop()
