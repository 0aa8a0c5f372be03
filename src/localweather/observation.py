"""The local weather observation record and its assembler."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from localweather.location.models import LocationType
from localweather.weather.models import WeatherCondition, WeatherSnapshot


class Observation(BaseModel):
    """Local weather record emitted once per successful collection cycle.

    ``timestamp`` is the provider's observation time and ``time_received``
    the wall-clock time the record was assembled, both in epoch seconds.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: float
    time_received: float
    sunrise: int | None = None
    sunset: int | None = None
    temperature: float | None = None
    pressure: float | None = None
    humidity: float | None = None
    cloudiness: float | None = None
    precipitation: float | None = None
    precipitation_period: int | None = None
    condition: WeatherCondition = WeatherCondition.UNKNOWN
    source: str
    location_type: LocationType


def build_observation(
    snapshot: WeatherSnapshot,
    time_received: float,
    location_type: LocationType,
) -> Observation:
    """Combine a fresh snapshot with capture time and location provenance."""
    return Observation(
        **snapshot.model_dump(),
        time_received=time_received,
        location_type=location_type,
    )
