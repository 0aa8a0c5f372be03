# src/localweather/sinks/protocols.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from localweather.observation import Observation
from localweather.utils.file import ensure_directory_exists

logger: Final = logging.getLogger(__name__)


@runtime_checkable
class RecordSink(Protocol):
    """Protocol defining the destination of emitted observations.

    Emission is fire-and-forget: callers do not wait for acknowledgment and
    ignore any return value. Implementations own the record once it is
    emitted.
    """

    def emit(self, topic: str, observation: Observation) -> None:
        """Deliver one observation.

        Args:
            topic: Name of the record stream
            observation: Record to deliver
        """
        ...


class JsonLinesSink:
    """Appends observations to a JSON-lines file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def emit(self, topic: str, observation: Observation) -> None:
        """Append ``{"topic": .., "value": {..}}`` as one line.

        Write failures are logged; delivery is best effort.
        """
        line = json.dumps({"topic": topic, "value": observation.model_dump(mode="json")})
        try:
            ensure_directory_exists(self.path.parent)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as exc:
            logger.error("Could not write %s record to %s: %s", topic, self.path, exc)


class MemorySink:
    """In-memory sink for testing and dry runs."""

    def __init__(self) -> None:
        self.records: list[tuple[str, Observation]] = []

    def emit(self, topic: str, observation: Observation) -> None:
        """Record the emission without delivering it anywhere."""
        self.records.append((topic, observation))

    @property
    def observations(self) -> list[Observation]:
        return [obs for _, obs in self.records]

    def reset_call_history(self) -> None:
        """Reset the recorded emissions for testing."""
        self.records = []
