# filepath: src/localweather/manager.py
"""Lifecycle manager for the periodic weather collection job."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from types import TracebackType
from typing import Final

from localweather.job import WeatherCollectionJob
from localweather.location.source import LocationSource
from localweather.service import WeatherApiService
from localweather.system.status import DeviceStatus
from localweather.weather.registry import WeatherApiRegistry, create_weather_api

logger: Final = logging.getLogger(__name__)


class WeatherApiManager:
    """Owns the collection job's registration with the scheduler.

    The weather source is resolved when the manager is built; an unknown
    source raises ConfigurationError before anything is registered.
    """

    def __init__(
        self,
        service: WeatherApiService,
        source: str,
        api_key: str,
        registry: WeatherApiRegistry | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            service: Host service providing scheduler, location, sink and status
            source: Weather source id, e.g. ``"openweathermap"``
            api_key: API key forwarded verbatim to the weather client
            registry: Weather source registry (default: built-in sources)

        Raises:
            ConfigurationError: If ``source`` is not a recognised weather source
        """
        self.service = service
        self._lock = threading.Lock()
        self._query_interval = service.query_interval
        self._registered = False
        self._closed = False

        self.weather_api = create_weather_api(
            source, api_key, registry=registry, timeout=service.settings.request_timeout
        )
        self.location_source = LocationSource(service.location_manager)
        self.job = WeatherCollectionJob(self.location_source, self.weather_api, service.sink)

        logger.info(
            "WeatherApiManager created for %s with interval of %d seconds and key %s",
            self.weather_api.source_name,
            self._query_interval,
            service.settings.masked_api_key,
        )

    @property
    def name(self) -> str:
        return self.weather_api.source_name

    @property
    def query_interval(self) -> int:
        return self._query_interval

    @property
    def is_started(self) -> bool:
        return self._registered

    def start(self, acceptable_ids: Iterable[str] = ()) -> None:
        """Register the collection job and start the scheduler.

        Args:
            acceptable_ids: Device ids the host accepts; a weather source has
                no physical device, so these are only logged
        """
        ids = sorted(acceptable_ids)
        if ids:
            logger.debug("Ignoring acceptable device ids for weather source: %s", ids)

        status = self.service.status_listener
        status.update_status(DeviceStatus.READY)

        logger.info("Starting WeatherApiManager")
        with self._lock:
            self.service.scheduler.register(
                self._query_interval, self.job, persist_across_restart=True
            )
            self._registered = True
            self._closed = False
        self.service.scheduler.start()

        status.update_status(DeviceStatus.CONNECTED)

    def set_query_interval(self, seconds: int) -> None:
        """Change the polling interval, effective from the next scheduled run.

        Raises:
            ValueError: If ``seconds`` is not positive
        """
        if seconds <= 0:
            raise ValueError(f"Query interval must be positive, got {seconds}")
        with self._lock:
            self._query_interval = seconds
            registered = self._registered
        if registered:
            self.service.scheduler.set_interval(seconds)

    def close(self) -> None:
        """Stop future cycles and close the weather client.

        Safe without ``start`` and when repeated.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            registered = self._registered
            self._registered = False

        if registered:
            self.service.scheduler.close()
            self.service.status_listener.update_status(DeviceStatus.DISCONNECTED)
        self.weather_api.close()
        logger.info("WeatherApiManager closed")

    def __enter__(self) -> WeatherApiManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
