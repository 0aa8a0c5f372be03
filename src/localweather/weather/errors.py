"""Exception classes for weather provider interactions.

A fetch that fails is reported through one of these classes. The client
returns them inside a :class:`~localweather.weather.api.FetchResult` rather
than raising, so a failed cycle is visible in the return type.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from localweather.errors import LocalWeatherError


class ProviderError(LocalWeatherError):
    """Error during a weather provider request or response parsing.

    Raised when the request fails due to network issues, an invalid API
    key, rate limiting, or malformed response data. Includes the name of
    the provider and the raw response when available.
    """

    def __init__(
        self,
        code: int,
        message: str,
        response: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code or 0 when no response was received
            message: Human-readable error message
            response: Optional raw API response for debugging
            source: Name of the weather provider that failed
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message
        self.response: Optional[Dict[str, Any]] = response
        self.source: Optional[str] = source

    @property
    def is_client_error(self) -> bool:
        """Check if this is a client-side error (4xx).

        Returns:
            True for 400-499 status codes
        """
        return 400 <= self.code < 500

    @property
    def is_server_error(self) -> bool:
        """Check if this is a server-side error (5xx).

        Returns:
            True for 500-599 status codes
        """
        return self.code >= 500

    @classmethod
    def from_response(
        cls,
        response: Dict[str, Any],
        status_code: int = 0,
        source: Optional[str] = None,
    ) -> ProviderError:
        """Create an error from an API response.

        Args:
            response: API response dictionary
            status_code: HTTP status code
            source: Name of the weather provider

        Returns:
            Appropriate ProviderError subclass
        """
        message = str(response.get("message", ""))
        if 400 <= status_code < 500:
            if status_code == 401 or status_code == 403:
                return AuthenticationError(
                    status_code, message or "Authentication failed", response, source
                )
            elif status_code == 404:
                return NotFoundError(
                    status_code, message or "Resource not found", response, source
                )
            elif status_code == 429:
                return RateLimitError(
                    status_code, message or "Rate limit exceeded", response, source
                )
            return ClientError(status_code, message or "Client error", response, source)
        elif status_code >= 500:
            return ServerError(status_code, message or "Server error", response, source)

        return cls(status_code, message or "Unknown error", response, source)


class NetworkError(ProviderError):
    """Raised when a network issue prevents API communication."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        source: Optional[str] = None,
    ) -> None:
        """Initialize with network error details.

        Args:
            message: Description of the network error
            original_error: The original exception that was caught
            source: Name of the weather provider
        """
        super().__init__(0, message, source=source)
        self.original_error = original_error


class AuthenticationError(ProviderError):
    """Raised when API authentication fails (invalid API key)."""

    pass


class NotFoundError(ProviderError):
    """Raised when a requested resource doesn't exist."""

    pass


class RateLimitError(ProviderError):
    """Raised when rate limits are exceeded."""

    pass


class ClientError(ProviderError):
    """Raised for general 4xx client errors."""

    pass


class ServerError(ProviderError):
    """Raised for 5xx server errors."""

    pass


class ParseError(ProviderError):
    """Raised when API response parsing fails."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        source: Optional[str] = None,
    ) -> None:
        """Initialize with parsing error details.

        Args:
            message: Description of the parsing error
            original_error: The original exception that was caught
            source: Name of the weather provider
        """
        super().__init__(0, message, source=source)
        self.original_error = original_error
