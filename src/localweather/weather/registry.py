"""Registry mapping weather source ids to client constructors."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Dict, Final, List

from localweather.constants import SOURCE_OPENWEATHERMAP
from localweather.errors import ConfigurationError

from .api import WeatherApi
from .openweathermap import OpenWeatherMapApi

logger: Final = logging.getLogger(__name__)

WeatherApiFactory = Callable[..., WeatherApi]


class WeatherApiRegistry:
    """Known weather sources, keyed by case-sensitive id."""

    def __init__(self) -> None:
        self._factories: Dict[str, WeatherApiFactory] = {}

    def register(self, source: str, factory: WeatherApiFactory) -> None:
        if source in self._factories:
            raise ValueError(f"Weather source '{source}' already registered")
        self._factories[source] = factory

    def create(self, source: str, api_key: str, **kwargs: object) -> WeatherApi:
        """Build the client for a source id.

        Args:
            source: Source id, matched exactly
            api_key: API key forwarded verbatim to the client
            **kwargs: Extra client options such as ``timeout``

        Returns:
            Client for the selected source

        Raises:
            ConfigurationError: If the source id is not registered
        """
        try:
            factory = self._factories[source]
        except KeyError as exc:
            logger.error(
                "The weather api '%s' is not recognised. Please set a different weather api source.",
                source,
            )
            raise ConfigurationError(
                f"Unknown weather source '{source}'; expected one of: {', '.join(self.list())}"
            ) from exc
        return factory(api_key, **kwargs)

    def list(self) -> List[str]:
        return list(self._factories.keys())


def default_registry() -> WeatherApiRegistry:
    """Create a registry holding every built-in weather source."""
    registry = WeatherApiRegistry()
    registry.register(SOURCE_OPENWEATHERMAP, OpenWeatherMapApi)
    return registry


def create_weather_api(
    source: str,
    api_key: str,
    registry: WeatherApiRegistry | None = None,
    **kwargs: object,
) -> WeatherApi:
    """Create a client for ``source``.

    Looks the source up in ``registry``, or in the built-in registry when
    none is given; raises ConfigurationError for an unknown source.
    """
    return (registry or default_registry()).create(source, api_key, **kwargs)
