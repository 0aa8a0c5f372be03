# filepath: src/localweather/job.py
"""Periodic local weather collection job."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Final

from localweather.constants import WEATHER_TOPIC
from localweather.errors import LocalWeatherError, LocationUnavailable
from localweather.location.source import LocationSource
from localweather.observation import Observation, build_observation
from localweather.sinks.protocols import RecordSink
from localweather.utils.time import TimeUtils
from localweather.weather.api import WeatherApi

logger: Final = logging.getLogger(__name__)


class CycleState(Enum):
    """States a single collection run passes through."""

    IDLE = "idle"
    LOCATING = "locating"
    FETCHING = "fetching"
    ASSEMBLING = "assembling"
    EMITTED = "emitted"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class CycleOutcome:
    """Terminal state of one run, with the record or the reason it was skipped."""

    state: CycleState
    observation: Observation | None = None
    error: LocalWeatherError | None = None

    @property
    def emitted(self) -> bool:
        return self.state is CycleState.EMITTED


class WeatherCollectionJob:
    """Collects one local weather observation per trigger.

    Each call to :meth:`run` is an independent pass through
    locate → fetch → assemble → emit. A missing location or a provider
    failure ends the pass at ``SKIPPED`` without raising, so the scheduler
    keeps its cadence. Nothing is retried within a pass.
    """

    def __init__(
        self,
        location_source: LocationSource,
        weather_api: WeatherApi,
        sink: RecordSink,
        topic: str = WEATHER_TOPIC,
        clock: Callable[[], float] = TimeUtils.now_epoch,
    ) -> None:
        self.location_source = location_source
        self.weather_api = weather_api
        self.sink = sink
        self.topic = topic
        self.clock = clock

    def __call__(self) -> None:
        self.run()

    def run(self) -> CycleOutcome:
        """Run one collection cycle.

        Returns:
            EMITTED with the record that was handed to the sink, or SKIPPED
            with the LocationUnavailable or ProviderError that ended the run
        """
        self._enter(CycleState.IDLE)

        self._enter(CycleState.LOCATING)
        location = self.location_source.last_known_location()
        if location is None:
            error = LocationUnavailable(self.location_source.providers)
            logger.error("Could not retrieve location (%s). No input for Weather API", error)
            return CycleOutcome(self._enter(CycleState.SKIPPED), error=error)

        self._enter(CycleState.FETCHING)
        result = self.weather_api.fetch_current(location.latitude, location.longitude)
        if result.snapshot is None:
            logger.error(
                "Could not get weather from %s API: %s",
                self.weather_api.source_name,
                result.error,
            )
            return CycleOutcome(self._enter(CycleState.SKIPPED), error=result.error)

        self._enter(CycleState.ASSEMBLING)
        observation = build_observation(result.snapshot, self.clock(), location.location_type)

        logger.info(
            "Weather: %s %s°C %s%% via %s (sunrise %s, sunset %s)",
            observation.condition.value,
            observation.temperature,
            observation.humidity,
            observation.location_type.value,
            observation.sunrise,
            observation.sunset,
        )
        self.sink.emit(self.topic, observation)
        return CycleOutcome(self._enter(CycleState.EMITTED), observation=observation)

    @staticmethod
    def _enter(state: CycleState) -> CycleState:
        logger.debug("Collection cycle → %s", state.value)
        return state
