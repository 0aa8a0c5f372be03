import json
import threading
import time
from pathlib import Path
from unittest.mock import Mock

import pytest

from localweather.scheduling import IntervalScheduler, JobScheduler, SchedulerState


class BlockingJob:
    """Job that holds every run until released, tracking overlap."""

    def __init__(self) -> None:
        self.release = threading.Event()
        self.calls = 0
        self.finished = 0
        self.active = 0
        self.max_active = 0
        self._cond = threading.Condition()

    def __call__(self) -> None:
        with self._cond:
            self.calls += 1
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            self._cond.notify_all()
        self.release.wait(5.0)
        with self._cond:
            self.active -= 1
            self.finished += 1
            self._cond.notify_all()

    def wait_for_calls(self, count: int, timeout: float = 5.0) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: self.calls >= count, timeout)

    def wait_for_finished(self, count: int, timeout: float = 5.0) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: self.finished >= count, timeout)


def _workers() -> list[threading.Thread]:
    return [t for t in threading.enumerate() if t.name == "localweather-scheduler"]


def test_scheduler_satisfies_protocol() -> None:
    assert isinstance(IntervalScheduler(), JobScheduler)


def test_tick_without_job_does_nothing() -> None:
    scheduler = IntervalScheduler()
    assert scheduler.tick(100.0) is False
    assert scheduler.next_due(100.0) is None


def test_first_tick_fires_then_waits_for_interval() -> None:
    job = Mock()
    scheduler = IntervalScheduler()
    scheduler.register(60, job)

    assert scheduler.tick(1000.0) is True
    assert scheduler.next_due() == 1060.0
    assert scheduler.tick(1059.9) is False
    assert scheduler.tick(1060.0) is True
    assert job.call_count == 2
    assert scheduler.last_fired == 1060.0


def test_job_failure_does_not_break_cadence() -> None:
    job = Mock(side_effect=[RuntimeError("boom"), None])
    scheduler = IntervalScheduler()
    scheduler.register(60, job)

    assert scheduler.tick(0.0) is True
    assert scheduler.tick(60.0) is True
    assert job.call_count == 2


def test_set_interval_recomputes_next_due() -> None:
    scheduler = IntervalScheduler()
    scheduler.register(60, Mock())
    scheduler.tick(1000.0)

    scheduler.set_interval(300)

    assert scheduler.interval == 300
    assert scheduler.next_due() == 1300.0
    assert scheduler.tick(1060.0) is False


def test_set_interval_same_value_keeps_cadence() -> None:
    scheduler = IntervalScheduler()
    scheduler.register(60, Mock())
    scheduler.tick(1000.0)

    for _ in range(3):
        scheduler.set_interval(60)

    assert scheduler.next_due() == 1060.0
    assert scheduler.last_fired == 1000.0


@pytest.mark.parametrize("seconds", [0, -1])
def test_rejects_non_positive_interval(seconds: int) -> None:
    scheduler = IntervalScheduler()
    with pytest.raises(ValueError):
        scheduler.register(seconds, Mock())
    scheduler.register(10, Mock())
    with pytest.raises(ValueError):
        scheduler.set_interval(seconds)


def test_last_fired_survives_restart(tmp_path: Path) -> None:
    state_file = tmp_path / "state" / "scheduler.json"
    first = IntervalScheduler(state_file=state_file)
    first.register(60, Mock())
    first.tick(5000.0)

    assert json.loads(state_file.read_text()) == {"last_fired": 5000.0}

    restarted = IntervalScheduler(state_file=state_file)
    restarted.register(60, Mock())
    assert restarted.next_due() == 5060.0
    assert restarted.tick(5030.0) is False


def test_state_not_persisted_when_not_requested(tmp_path: Path) -> None:
    state_file = tmp_path / "scheduler.json"
    scheduler = IntervalScheduler(state_file=state_file)
    scheduler.register(60, Mock(), persist_across_restart=False)
    scheduler.tick(10.0)

    assert not state_file.exists()


def test_corrupt_state_file_is_ignored(tmp_path: Path) -> None:
    state_file = tmp_path / "scheduler.json"
    state_file.write_text("{not json")

    assert SchedulerState.load(state_file) == SchedulerState()


def test_start_requires_registered_job() -> None:
    with pytest.raises(RuntimeError):
        IntervalScheduler().start()


def test_worker_fires_and_stop_prevents_further_runs() -> None:
    fired = threading.Event()
    job = Mock(side_effect=lambda: fired.set())
    scheduler = IntervalScheduler()
    scheduler.register(3600, job)

    scheduler.start()
    scheduler.start()
    try:
        assert fired.wait(5.0)
        assert scheduler.is_running
    finally:
        scheduler.close()

    assert not scheduler.is_running
    assert job.call_count == 1
    assert scheduler.tick(scheduler.clock() + 7200) is False


def test_trigger_missed_during_long_run_fires_once_afterwards() -> None:
    now = [0.0]
    job = BlockingJob()
    scheduler = IntervalScheduler(clock=lambda: now[0])
    scheduler.register(10, job)

    scheduler.start()
    try:
        assert job.wait_for_calls(1)
        # two intervals pass while the first run is still in progress
        now[0] = 25.0
        job.release.set()

        assert job.wait_for_calls(2)
        assert job.wait_for_finished(2)
        time.sleep(0.2)
        assert job.calls == 2
        assert scheduler.last_fired == 25.0
        assert scheduler.next_due() == 35.0
    finally:
        job.release.set()
        scheduler.close()


def test_runs_never_overlap() -> None:
    now = [0.0]
    job = BlockingJob()
    scheduler = IntervalScheduler(clock=lambda: now[0])
    scheduler.register(10, job)

    scheduler.start()
    try:
        assert job.wait_for_calls(1)
        now[0] = 10.0
        manual = threading.Thread(target=scheduler.tick)
        manual.start()
        time.sleep(0.2)
        assert job.calls == 1

        job.release.set()
        manual.join(5.0)

        assert job.wait_for_finished(2)
        assert job.max_active == 1
    finally:
        job.release.set()
        scheduler.close()


def test_close_lets_run_in_progress_finish() -> None:
    job = BlockingJob()
    scheduler = IntervalScheduler(join_timeout=0.1)
    scheduler.register(3600, job)

    scheduler.start()
    try:
        assert job.wait_for_calls(1)
        scheduler.close()
        assert job.finished == 0

        job.release.set()
        assert job.wait_for_finished(1)
        assert job.calls == 1
    finally:
        job.release.set()
        scheduler.close()


def test_restart_while_run_in_progress_keeps_one_worker() -> None:
    before = set(_workers())
    job = BlockingJob()
    scheduler = IntervalScheduler(join_timeout=0.1)
    scheduler.register(3600, job)

    scheduler.start()
    try:
        assert job.wait_for_calls(1)
        first = [t for t in _workers() if t not in before]
        scheduler.stop()
        scheduler.start()

        job.release.set()
        for worker in first:
            worker.join(5.0)
            assert not worker.is_alive()

        alive = [t for t in _workers() if t not in before]
        assert len(alive) == 1
        assert scheduler.is_running
        assert job.calls == 1
    finally:
        job.release.set()
        scheduler.close()
