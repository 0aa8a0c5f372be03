"""Weather package - holds the provider clients, models, and custom errors."""

from .api import FetchResult, WeatherApi
from .errors import (
    AuthenticationError,
    ClientError,
    NetworkError,
    NotFoundError,
    ParseError,
    ProviderError,
    RateLimitError,
    ServerError,
)
from .models import WeatherCondition, WeatherSnapshot
from .openweathermap import OpenWeatherMapApi
from .registry import WeatherApiRegistry, create_weather_api, default_registry

__all__ = [
    "AuthenticationError",
    "ClientError",
    "FetchResult",
    "NetworkError",
    "NotFoundError",
    "OpenWeatherMapApi",
    "ParseError",
    "ProviderError",
    "RateLimitError",
    "ServerError",
    "WeatherApi",
    "WeatherApiRegistry",
    "WeatherCondition",
    "WeatherSnapshot",
    "create_weather_api",
    "default_registry",
]
