"""Persisted scheduler state."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Final

from localweather.utils.file import ensure_directory_exists

logger: Final = logging.getLogger(__name__)


@dataclass
class SchedulerState:
    """Trigger bookkeeping kept across process restarts."""

    last_fired: float | None = None

    @classmethod
    def load(cls, path: Path) -> SchedulerState:
        """Read state from ``path``; a missing or unreadable file means no state."""
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            last_fired = data.get("last_fired")
            return cls(last_fired=float(last_fired) if last_fired is not None else None)
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Ignoring unreadable scheduler state %s: %s", path, exc)
            return cls()

    def save(self, path: Path) -> None:
        """Write state to ``path`` via a temporary file and rename."""
        ensure_directory_exists(path.parent)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(json.dumps(asdict(self)), encoding="utf-8")
        tmp.replace(path)
