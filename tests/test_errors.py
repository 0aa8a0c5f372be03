import pytest

from localweather.errors import ConfigurationError, LocalWeatherError, LocationUnavailable
from localweather.weather.errors import (
    AuthenticationError,
    ClientError,
    NetworkError,
    NotFoundError,
    ParseError,
    ProviderError,
    RateLimitError,
    ServerError,
)


def test_provider_error_str_and_flags() -> None:
    err = ProviderError(code=404, message="Not Found", source="OpenWeatherMap")
    assert str(err) == "[404] Not Found"
    assert err.is_client_error is True
    assert err.is_server_error is False
    assert err.source == "OpenWeatherMap"


@pytest.mark.parametrize(
    "code, expected_type",
    [
        (401, AuthenticationError),
        (403, AuthenticationError),
        (404, NotFoundError),
        (429, RateLimitError),
        (400, ClientError),
        (500, ServerError),
        (999, ServerError),
        (0, ProviderError),
    ],
)
def test_from_response_creates_expected_error(
    code: int, expected_type: type[ProviderError]
) -> None:
    resp = {"message": "test error"}
    err = ProviderError.from_response(resp, code, source="OpenWeatherMap")
    assert type(err) is expected_type
    assert err.code == code
    assert err.source == "OpenWeatherMap"
    assert "test error" in str(err)


def test_from_response_without_message_uses_default() -> None:
    err = ProviderError.from_response({}, 429)
    assert str(err) == "[429] Rate limit exceeded"


def test_network_error_wraps_exception() -> None:
    try:
        raise ConnectionError("BOOM")
    except ConnectionError as e:
        err = NetworkError(message="Connection error", original_error=e)
        assert isinstance(err, ProviderError)
        assert str(err) == "[0] Connection error"
        assert err.original_error is e


def test_parse_error_wraps_exception() -> None:
    try:
        raise ValueError("bad parse")
    except ValueError as e:
        err = ParseError(message="Parse error", original_error=e)
        assert isinstance(err, ParseError)
        assert str(err) == "[0] Parse error"
        assert isinstance(err.original_error, Exception)


def test_error_hierarchy_shares_base() -> None:
    assert issubclass(ProviderError, LocalWeatherError)
    assert issubclass(ConfigurationError, LocalWeatherError)
    assert issubclass(LocationUnavailable, LocalWeatherError)


def test_location_unavailable_names_providers() -> None:
    err = LocationUnavailable(("gps", "network"))
    assert err.providers == ("gps", "network")
    assert str(err) == "No last known location from providers: gps, network"
    assert str(LocationUnavailable()) == "No last known location"
