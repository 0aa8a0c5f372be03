from pathlib import Path

import pytest

from localweather.settings import UserSettings
from localweather.sinks import MemorySink


@pytest.fixture
def settings(tmp_path: Path) -> UserSettings:
    return UserSettings(
        api_key="test-api-key-123",
        source="openweathermap",
        query_interval=600,
        latitude=52.0,
        longitude=4.3,
        network_location=False,
        output_path=tmp_path / "out" / "local_weather.jsonl",
    )


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()
