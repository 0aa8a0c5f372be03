# filepath: src/localweather/service.py
"""Host service for the local weather collector."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from localweather.constants import GPS_PROVIDER, NETWORK_PROVIDER
from localweather.location.providers import (
    FixedPositionProvider,
    IpGeolocationProvider,
    LocationManager,
)
from localweather.scheduling import IntervalScheduler
from localweather.scheduling.protocols import JobScheduler
from localweather.settings.user import UserSettings
from localweather.sinks.protocols import JsonLinesSink, RecordSink
from localweather.system.status import LoggingStatusListener, StatusListener

TEST_CONFIG_YAML = """\
api_key: "test_api_key_123"
source: openweathermap
query_interval: 600
latitude: 52.0
longitude: 4.3
network_location: false
"""

logger: Final = logging.getLogger(__name__)


class WeatherApiService:
    """Owns the collaborators a collection manager runs against.

    Everything the manager needs from its host lives here:
    - Loaded user settings and the configured query interval
    - The scheduler that triggers collection cycles
    - The location system with its position providers
    - The sink observations are emitted to
    - The listener device status is reported to

    Any collaborator can be injected; the rest are built from settings.
    """

    def __init__(
        self,
        settings: UserSettings,
        scheduler: JobScheduler | None = None,
        location_manager: LocationManager | None = None,
        sink: RecordSink | None = None,
        status_listener: StatusListener | None = None,
    ) -> None:
        self.settings = settings
        self.scheduler = scheduler or IntervalScheduler(state_file=settings.state_file)
        self.location_manager = location_manager or self._build_location_manager(settings)
        self.sink = sink or JsonLinesSink(settings.output_path)
        self.status_listener = status_listener or LoggingStatusListener()

    @classmethod
    def from_config(cls, config_path: Path | None = None, debug: bool = False) -> WeatherApiService:
        """Configure logging, load settings and build the default service.

        Args:
            config_path: Path to config.yaml (default search paths if None)
            debug: Enable debug logging
        """
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )
        return cls(UserSettings.load(config_path))

    @property
    def query_interval(self) -> int:
        return self.settings.query_interval

    @staticmethod
    def _build_location_manager(settings: UserSettings) -> LocationManager:
        manager = LocationManager()
        if settings.has_fixed_position:
            position = FixedPositionProvider(settings.latitude, settings.longitude)  # type: ignore[arg-type]
            manager.add_provider(GPS_PROVIDER, position)
        if settings.network_location:
            manager.add_provider(
                NETWORK_PROVIDER,
                IpGeolocationProvider(settings.geolocation_url, settings.request_timeout),
            )
        if not manager.provider_ids:
            logger.warning("No location providers configured; every cycle will be skipped")
        return manager
