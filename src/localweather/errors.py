"""Exception hierarchy for localweather."""

from __future__ import annotations


class LocalWeatherError(Exception):
    """Base exception for all localweather errors."""

    pass


class ConfigurationError(LocalWeatherError):
    """Invalid configuration, such as an unrecognised weather source.

    This is the only error that keeps the collection job from starting.
    """

    pass


class LocationUnavailable(LocalWeatherError):
    """No position could be determined for the current cycle.

    Covers both "no fix yet" and denied location access; the only valid
    reaction to either is skipping the cycle.
    """

    def __init__(self, providers: tuple[str, ...] = ()) -> None:
        self.providers = providers
        message = "No last known location"
        if providers:
            message += f" from providers: {', '.join(providers)}"
        super().__init__(message)
