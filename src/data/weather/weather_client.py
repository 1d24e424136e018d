"""
Open-Meteo historical archive client.

The archive reports metric units; rows are converted to °F, inches and
hours of daylight before they reach storage.
"""

import logging

import requests

logger = logging.getLogger(__name__)

OPEN_METEO_ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"

DAILY_VARIABLES = [
    "temperature_2m_max",
    "temperature_2m_min",
    "temperature_2m_mean",
    "precipitation_sum",
    "relative_humidity_2m_mean",
    "cloud_cover_mean",
    "daylight_duration",
]

MM_PER_INCH = 25.4


class WeatherAPIError(Exception):
    pass


def celsius_to_fahrenheit(value: float) -> float:
    return value * 9 / 5 + 32


def mm_to_inches(value: float) -> float:
    return value / MM_PER_INCH


def _value_at(daily, key, i):
    values = daily.get(key) or []
    if i >= len(values) or values[i] is None:
        return 0
    return values[i]


def parse_daily_response(payload):
    """Turn the archive's column-oriented `daily` block into one dict per day"""
    daily = payload.get("daily") or {}
    rows = []

    for i, day in enumerate(daily.get("time") or []):
        rows.append({
            "date": day,
            "temp_min": celsius_to_fahrenheit(_value_at(daily, "temperature_2m_min", i)),
            "temp_max": celsius_to_fahrenheit(_value_at(daily, "temperature_2m_max", i)),
            "temp_avg": celsius_to_fahrenheit(_value_at(daily, "temperature_2m_mean", i)),
            "precipitation": mm_to_inches(_value_at(daily, "precipitation_sum", i)),
            "humidity": round(_value_at(daily, "relative_humidity_2m_mean", i)),
            "cloud_cover": round(_value_at(daily, "cloud_cover_mean", i)),
            # seconds -> hours
            "daylight_hours": _value_at(daily, "daylight_duration", i) / 3600,
        })

    return rows


class OpenMeteoClient:
    def __init__(self, base_url=OPEN_METEO_ARCHIVE_URL, timeout=60):
        self.base_url = base_url
        self.timeout = timeout
        self.session = requests.Session()

    def get_historical_weather(self, latitude, longitude, start_date, end_date,
                               timezone="America/New_York"):
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": str(start_date),
            "end_date": str(end_date),
            "daily": ",".join(DAILY_VARIABLES),
            "timezone": timezone,
        }

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise WeatherAPIError(f"Weather API request failed: {e}") from e

        if response.status_code != 200:
            raise WeatherAPIError(f"Weather API error: {response.status_code} {response.reason}")

        rows = parse_daily_response(response.json())
        logger.info("Fetched %d weather days for %s..%s", len(rows), start_date, end_date)
        return rows

    def get_weather_for_date(self, latitude, longitude, day, timezone="America/New_York"):
        rows = self.get_historical_weather(latitude, longitude, day, day, timezone)
        return rows[0] if rows else None
