"""Weather API client for OpenWeatherMap current conditions."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Final

import requests
from pydantic import ValidationError

from .api import FetchResult
from .errors import NetworkError, ParseError, ProviderError
from .models import CurrentWeatherResponse, WeatherSnapshot

logger: Final = logging.getLogger(__name__)

# API endpoint
API_URL: Final = "https://api.openweathermap.org/data/2.5/weather"

SOURCE_NAME: Final = "OpenWeatherMap"

# Human‑readable explanations for common HTTP errors
HTTP_ERROR_MAP: Final = {
    400: "Bad request - check lat/lon or parameters",
    401: "Invalid or missing API key",
    403: "Account blocked / key revoked",
    404: "Coordinates returned no data",
    429: "Rate limit exceeded",
    500: "OpenWeatherMap internal error",
    502: "Bad gateway at OpenWeatherMap",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}


class OpenWeatherMapApi:
    """OpenWeatherMap client for the current weather endpoint.

    Handles the API request, network and HTTP error mapping, and transforms
    the raw JSON response into a :class:`WeatherSnapshot` in metric units.
    The API key is forwarded verbatim.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = 10,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the weather API client.

        Args:
            api_key: OpenWeatherMap API key
            timeout: Timeout for API requests in seconds
            session: Optional HTTP session to reuse connections
        """
        self.api_key = api_key
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._last_snapshot: WeatherSnapshot | None = None

    @property
    def source_name(self) -> str:
        return SOURCE_NAME

    @property
    def last_snapshot(self) -> WeatherSnapshot | None:
        return self._last_snapshot

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def fetch_current(self, latitude: float, longitude: float) -> FetchResult:
        """Retrieve current conditions at a position.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            FetchResult with a snapshot, or with one of NetworkError,
            AuthenticationError, RateLimitError, ClientError, ServerError
            or ParseError
        """
        try:
            snapshot = self._request_snapshot(latitude, longitude)
        except ProviderError as exc:
            return FetchResult.failure(exc)

        # Publish the complete snapshot in one assignment
        self._last_snapshot = snapshot
        return FetchResult.success(snapshot)

    def _request_snapshot(self, latitude: float, longitude: float) -> WeatherSnapshot:
        params = {
            "lat": latitude,
            "lon": longitude,
            "appid": self.api_key,
            "units": "metric",
        }

        try:
            resp = self.session.get(API_URL, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Weather API network error: %s", exc)
            raise NetworkError(f"Network error: {exc}", exc, source=SOURCE_NAME) from exc

        if resp.status_code != 200:
            raise self._http_error(resp)

        try:
            raw: Dict[str, Any] = json.loads(resp.text)
            weather = CurrentWeatherResponse.model_validate(raw)
        except (ValueError, ValidationError) as exc:
            logger.warning("Could not parse weather response: %s", exc)
            raise ParseError(f"Malformed response: {exc}", exc, source=SOURCE_NAME) from exc

        return weather.to_snapshot(SOURCE_NAME)

    def _http_error(self, resp: requests.Response) -> ProviderError:
        fallback = HTTP_ERROR_MAP.get(resp.status_code, resp.text)
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        body.setdefault("message", fallback)
        logger.error("Weather API error: %s - %s", resp.status_code, body["message"])
        return ProviderError.from_response(body, resp.status_code, source=SOURCE_NAME)
