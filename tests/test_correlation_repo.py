import pytest

from src.analysis.correlation.correlation import WeatherCorrelationAnalyzer
from src.analysis.correlation.repo.repo import CorrelationRepository


def test_load_commits_and_weather(seeded_database_url):
    repo = CorrelationRepository(seeded_database_url)

    commits = repo.load_commits()
    weather = repo.load_weather()

    assert len(commits) == 4
    assert {"commit_date", "additions", "deletions"} <= set(commits.columns)
    assert len(weather) == 2


def test_overview_stats(seeded_database_url):
    stats = CorrelationRepository(seeded_database_url).load_overview_stats()

    assert stats["commits"] == {
        "total_commits": 4,
        "total_repos": 2,
        "date_range_start": "2024-01-15",
        "date_range_end": "2024-07-04",
    }
    assert stats["pull_requests"] == {"total_prs": 2, "merged_prs": 1}
    assert stats["weather"] == {
        "weather_days": 2,
        "date_range_start": "2024-01-15",
        "date_range_end": "2024-01-16",
    }


def test_overview_stats_empty_database(database_url):
    stats = CorrelationRepository(database_url).load_overview_stats()

    assert stats["commits"]["total_commits"] == 0
    assert stats["commits"]["date_range_start"] is None
    assert stats["weather"]["weather_days"] == 0


def test_analyzer_end_to_end(seeded_database_url):
    results = WeatherCorrelationAnalyzer(seeded_database_url).analyze()

    assert results["daily_metrics"] == [{
        "date": "2024-01-15",
        "commit_count": 3,
        "lines_changed": 50,
        "temp": 28.0,
        "precipitation": 0.0,
        "daylight_hours": 9.0,
    }]
    assert [row["season"] for row in results["seasonal_stats"]] == ["Winter"]
    assert results["seasonal_stats"][0]["avg_commits_per_day"] == pytest.approx(3.0)
    assert results["commits_by_temp"] == [
        {"temp_range": "< 32°F (Freezing)", "commit_count": 3, "avg_lines_changed": pytest.approx(50 / 3)}
    ]
    assert results["commits_by_precip"][0]["precip_category"] == "No Rain"


def test_analyzer_on_empty_database(database_url):
    results = WeatherCorrelationAnalyzer(database_url).analyze()

    assert results["daily_metrics"] == []
    assert results["seasonal_stats"] == []
    assert results["correlations"] == {
        "temp_vs_commits": 0.0,
        "precip_vs_commits": 0.0,
        "daylight_vs_commits": 0.0,
    }
