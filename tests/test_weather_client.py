from unittest.mock import MagicMock, patch

import pytest
import requests

from src.data.weather.weather_client import (
    OpenMeteoClient,
    WeatherAPIError,
    celsius_to_fahrenheit,
    mm_to_inches,
    parse_daily_response,
)

PAYLOAD = {
    "daily": {
        "time": ["2024-01-15", "2024-01-16"],
        "temperature_2m_max": [5.0, None],
        "temperature_2m_min": [-5.0, 0.0],
        "temperature_2m_mean": [-2.0, 1.0],
        "precipitation_sum": [0.0, 12.7],
        "relative_humidity_2m_mean": [61.4, 80.6],
        "cloud_cover_mean": [40.2, 99.5],
        "daylight_duration": [33480.0, 33660.0],
    }
}


def test_unit_conversions():
    assert celsius_to_fahrenheit(0) == 32
    assert celsius_to_fahrenheit(100) == 212
    assert celsius_to_fahrenheit(-40) == -40
    assert mm_to_inches(25.4) == pytest.approx(1.0)


def test_parse_daily_response():
    first, second = parse_daily_response(PAYLOAD)

    assert first["date"] == "2024-01-15"
    assert first["temp_avg"] == pytest.approx(28.4)
    assert first["temp_min"] == pytest.approx(23.0)
    assert first["precipitation"] == 0
    assert first["humidity"] == 61
    assert first["cloud_cover"] == 40
    assert first["daylight_hours"] == pytest.approx(9.3)

    assert second["precipitation"] == pytest.approx(0.5)
    # missing reading coalesces to 0 °C before conversion
    assert second["temp_max"] == pytest.approx(32.0)


def test_parse_empty_response():
    assert parse_daily_response({}) == []


@patch("src.data.weather.weather_client.requests.Session.get")
def test_get_historical_weather(mock_get):
    mock_get.return_value = MagicMock(status_code=200, json=MagicMock(return_value=PAYLOAD))

    rows = OpenMeteoClient().get_historical_weather(40.7, -74.0, "2024-01-15", "2024-01-16")

    assert len(rows) == 2
    params = mock_get.call_args.kwargs["params"]
    assert params["start_date"] == "2024-01-15"
    assert params["timezone"] == "America/New_York"
    assert "daylight_duration" in params["daily"]


@patch("src.data.weather.weather_client.requests.Session.get")
def test_get_historical_weather_http_error(mock_get):
    mock_get.return_value = MagicMock(status_code=400, reason="Bad Request")
    with pytest.raises(WeatherAPIError):
        OpenMeteoClient().get_historical_weather(40.7, -74.0, "2024-01-15", "2024-01-16")


@patch("src.data.weather.weather_client.requests.Session.get")
def test_get_historical_weather_transport_error(mock_get):
    mock_get.side_effect = requests.exceptions.Timeout("slow")
    with pytest.raises(WeatherAPIError):
        OpenMeteoClient().get_historical_weather(40.7, -74.0, "2024-01-15", "2024-01-16")


@patch("src.data.weather.weather_client.requests.Session.get")
def test_get_weather_for_date(mock_get):
    mock_get.return_value = MagicMock(status_code=200, json=MagicMock(return_value={"daily": {"time": []}}))
    assert OpenMeteoClient().get_weather_for_date(40.7, -74.0, "2024-01-15") is None
