from datetime import date
from unittest.mock import MagicMock

import pandas as pd

from src.analysis.correlation.repo.repo import CorrelationRepository
from src.data.weather.weather_collector import WeatherCollector


def test_sync_without_commits_does_not_call_archive(database_url):
    client = MagicMock()
    collector = WeatherCollector(database_url, 40.7, -74.0, client=client)

    result = collector.sync()

    assert result["weather_added"] == 0
    assert result["total_dates"] == 0
    client.get_historical_weather.assert_not_called()


def test_sync_fetches_commit_range_and_skips_stored_days(seeded_database_url):
    client = MagicMock()
    client.get_historical_weather.return_value = [
        {"date": "2024-01-15", "temp_avg": 99.0, "precipitation": 0.0, "daylight_hours": 9.0},
        {"date": "2024-07-04", "temp_avg": 85.0, "precipitation": 0.1, "daylight_hours": 15.0},
    ]
    collector = WeatherCollector(seeded_database_url, 40.7, -74.0, client=client)

    result = collector.sync()

    client.get_historical_weather.assert_called_once_with(
        40.7, -74.0, date(2024, 1, 15), date(2024, 7, 4), "America/New_York"
    )
    assert result["weather_added"] == 1
    assert result["date_range"] == {"start_date": "2024-01-15", "end_date": "2024-07-04"}
    assert result["total_dates"] == 2

    weather = CorrelationRepository(seeded_database_url).load_weather()
    stored = weather.set_index(pd.to_datetime(weather["date"]).dt.date)["temp_avg"]
    # existing observation left untouched
    assert stored[date(2024, 1, 15)] == 28
    assert stored[date(2024, 7, 4)] == 85
