import json
from typing import Any
from unittest.mock import Mock, patch

import pytest
import requests

from fakes import owm_payload
from localweather.weather.api import WeatherApi
from localweather.weather.errors import (
    AuthenticationError,
    NetworkError,
    ParseError,
    RateLimitError,
    ServerError,
)
from localweather.weather.models import CurrentWeatherResponse, WeatherCondition
from localweather.weather.openweathermap import API_URL, OpenWeatherMapApi


def _response(status_code: int, payload: Any = None, text: str | None = None) -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.text = text if text is not None else json.dumps(payload)
    if payload is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def session() -> Mock:
    return Mock(spec=requests.Session)


@pytest.fixture
def api(session: Mock) -> OpenWeatherMapApi:
    return OpenWeatherMapApi("fake-api-key", timeout=3, session=session)


def test_client_satisfies_protocol(api: OpenWeatherMapApi) -> None:
    assert isinstance(api, WeatherApi)
    assert api.source_name == "OpenWeatherMap"
    assert api.last_snapshot is None


def test_close_leaves_injected_session_open(api: OpenWeatherMapApi, session: Mock) -> None:
    api.close()

    session.close.assert_not_called()


def test_close_closes_own_session() -> None:
    with patch("localweather.weather.openweathermap.requests.Session") as session_cls:
        api = OpenWeatherMapApi("fake-api-key")

    api.close()

    session_cls.return_value.close.assert_called_once_with()


def test_fetch_current_success(api: OpenWeatherMapApi, session: Mock) -> None:
    session.get.return_value = _response(200, owm_payload())

    result = api.fetch_current(52.0, 4.3)

    assert result.ok
    assert result.error is None
    snapshot = result.snapshot
    assert snapshot is not None
    assert snapshot.timestamp == 1714728000.0
    assert snapshot.sunrise == 1714702800
    assert snapshot.sunset == 1714753200
    assert snapshot.temperature == 15.2
    assert snapshot.pressure == 1015
    assert snapshot.humidity == 80
    assert snapshot.cloudiness == 75
    assert snapshot.precipitation == 0.0
    assert snapshot.precipitation_period == 1
    assert snapshot.condition is WeatherCondition.CLOUDY
    assert snapshot.source == "OpenWeatherMap"
    assert api.last_snapshot == snapshot

    session.get.assert_called_once_with(
        API_URL,
        params={"lat": 52.0, "lon": 4.3, "appid": "fake-api-key", "units": "metric"},
        timeout=3,
    )


def test_network_error_keeps_previous_snapshot(api: OpenWeatherMapApi, session: Mock) -> None:
    session.get.return_value = _response(200, owm_payload())
    first = api.fetch_current(52.0, 4.3).snapshot

    session.get.side_effect = requests.Timeout("read timed out")
    result = api.fetch_current(52.0, 4.3)

    assert not result.ok
    assert result.snapshot is None
    assert isinstance(result.error, NetworkError)
    assert result.error.source == "OpenWeatherMap"
    assert isinstance(result.error.original_error, requests.Timeout)
    assert api.last_snapshot is first


@pytest.mark.parametrize(
    "status_code, body, expected_type, expected_message",
    [
        (401, {"cod": 401, "message": "Invalid API key."}, AuthenticationError, "Invalid API key."),
        (429, None, RateLimitError, "Rate limit exceeded"),
        (503, None, ServerError, "Service unavailable (maintenance)"),
    ],
)
def test_http_errors_are_returned(
    api: OpenWeatherMapApi,
    session: Mock,
    status_code: int,
    body: dict[str, Any] | None,
    expected_type: type,
    expected_message: str,
) -> None:
    session.get.return_value = _response(status_code, body, text="error")

    result = api.fetch_current(52.0, 4.3)

    assert isinstance(result.error, expected_type)
    assert result.error.code == status_code
    assert expected_message in str(result.error)
    assert api.last_snapshot is None


def test_malformed_body_is_parse_error(api: OpenWeatherMapApi, session: Mock) -> None:
    session.get.return_value = _response(200, None, text="<html>oops</html>")

    result = api.fetch_current(52.0, 4.3)

    assert isinstance(result.error, ParseError)
    assert api.last_snapshot is None


def test_missing_timestamp_is_parse_error(api: OpenWeatherMapApi, session: Mock) -> None:
    payload = owm_payload()
    del payload["dt"]
    session.get.return_value = _response(200, payload)

    result = api.fetch_current(52.0, 4.3)

    assert isinstance(result.error, ParseError)


def test_precipitation_prefers_last_hour() -> None:
    response = CurrentWeatherResponse.model_validate(
        owm_payload(rain={"1h": 0.4, "3h": 2.0}, snow={"1h": 0.1})
    )
    assert response.precipitation() == pytest.approx((0.5, 1))


def test_precipitation_falls_back_to_three_hours() -> None:
    response = CurrentWeatherResponse.model_validate(owm_payload(rain={"3h": 1.5}))
    assert response.precipitation() == (1.5, 3)


def test_missing_optional_blocks_become_none() -> None:
    payload = owm_payload()
    del payload["clouds"]
    payload["main"] = {"temp": 3.0}
    payload["weather"] = []

    snapshot = CurrentWeatherResponse.model_validate(payload).to_snapshot("OpenWeatherMap")

    assert snapshot.temperature == 3.0
    assert snapshot.pressure is None
    assert snapshot.humidity is None
    assert snapshot.cloudiness is None
    assert snapshot.condition is WeatherCondition.UNKNOWN


@pytest.mark.parametrize(
    "condition_id, expected",
    [
        (211, WeatherCondition.THUNDER),
        (301, WeatherCondition.DRIZZLE),
        (500, WeatherCondition.RAINY),
        (511, WeatherCondition.ICY),
        (600, WeatherCondition.SNOWY),
        (611, WeatherCondition.ICY),
        (741, WeatherCondition.FOGGY),
        (721, WeatherCondition.HAZY),
        (761, WeatherCondition.SANDSTORM),
        (800, WeatherCondition.CLEAR),
        (804, WeatherCondition.CLOUDY),
        (906, WeatherCondition.HAILING),
        (781, WeatherCondition.UNKNOWN),
        (None, WeatherCondition.UNKNOWN),
    ],
)
def test_condition_mapping(condition_id: int | None, expected: WeatherCondition) -> None:
    assert WeatherCondition.from_owm_id(condition_id) is expected
