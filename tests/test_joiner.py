from datetime import date, datetime

import pandas as pd

from conftest import make_commits, make_weather
from src.analysis.correlation.joiner import build_daily_metrics, count_unpaired_days, DAILY_METRIC_COLUMNS


def test_single_day_scenario():
    commits = make_commits([
        (datetime(2024, 1, 15, 9, 0), 10, 5),
        (datetime(2024, 1, 15, 12, 0), 20, 0),
        (datetime(2024, 1, 15, 18, 0), 0, 15),
    ])
    weather = make_weather([("2024-01-15", 28.0, 0.0, 9.0)])

    daily = build_daily_metrics(commits, weather)

    assert len(daily) == 1
    row = daily.iloc[0]
    assert row["date"] == date(2024, 1, 15)
    assert row["commit_count"] == 3
    assert row["lines_changed"] == 50
    assert row["temp"] == 28.0
    assert row["precipitation"] == 0.0
    assert row["daylight_hours"] == 9.0


def test_inner_join_drops_unpaired_days():
    commits = make_commits([
        (datetime(2024, 3, 1, 10), 1, 1),
        (datetime(2024, 3, 2, 10), 1, 1),
        (datetime(2024, 3, 2, 11), 1, 1),
        (datetime(2024, 3, 5, 10), 1, 1),
    ])
    weather = make_weather([
        ("2024-03-02", 40.0, 0.0, 11.0),
        ("2024-03-03", 41.0, 0.0, 11.1),
        ("2024-03-05", 45.0, 0.3, 11.3),
    ])

    daily = build_daily_metrics(commits, weather)

    assert list(daily["date"]) == [date(2024, 3, 2), date(2024, 3, 5)]
    assert list(daily["commit_count"]) == [2, 1]
    assert count_unpaired_days(commits, weather) == {
        "commit_days_without_weather": 1,
        "weather_days_without_commits": 1,
    }


def test_output_sorted_by_date_regardless_of_input_order():
    commits = make_commits([
        (datetime(2024, 5, 3, 10), 1, 0),
        (datetime(2024, 5, 1, 10), 1, 0),
        (datetime(2024, 5, 2, 10), 1, 0),
    ])
    weather = make_weather([
        ("2024-05-02", 60.0, 0.0, 14.0),
        ("2024-05-03", 61.0, 0.0, 14.0),
        ("2024-05-01", 59.0, 0.0, 14.0),
    ])

    daily = build_daily_metrics(commits, weather)

    assert list(daily["date"]) == sorted(daily["date"])
    assert daily["date"].is_unique


def test_empty_inputs_give_empty_frame():
    empty = build_daily_metrics(make_commits([]), make_weather([("2024-01-01", 30.0, 0.0, 9.0)]))
    assert empty.empty
    assert list(empty.columns) == DAILY_METRIC_COLUMNS

    assert build_daily_metrics(make_commits([(datetime(2024, 1, 1), 1, 1)]), make_weather([])).empty


def test_missing_line_counts_and_weather_values_coalesce_to_zero():
    commits = make_commits([(datetime(2024, 2, 1, 8), None, 4)])
    weather = make_weather([("2024-02-01", None, None, 10.0)])

    row = build_daily_metrics(commits, weather).iloc[0]

    assert row["lines_changed"] == 4
    assert row["temp"] == 0
    assert row["precipitation"] == 0


def test_aware_timestamps_are_converted_before_truncation():
    # 02:30 UTC is still the previous evening in New York
    commits = make_commits([(pd.Timestamp("2024-01-16T02:30:00Z"), 1, 1)])
    weather = make_weather([
        ("2024-01-15", 30.0, 0.0, 9.5),
        ("2024-01-16", 31.0, 0.0, 9.6),
    ])

    daily = build_daily_metrics(commits, weather, timezone="America/New_York")

    assert list(daily["date"]) == [date(2024, 1, 15)]


def test_commit_count_matches_commits_on_each_date():
    stamps = [datetime(2024, 6, day, hour) for day in (1, 2, 3) for hour in range(day)]
    commits = make_commits([(stamp, 1, 0) for stamp in stamps])
    weather = make_weather([(f"2024-06-0{day}", 70.0, 0.0, 15.0) for day in (1, 2, 3)])

    daily = build_daily_metrics(commits, weather)

    assert dict(zip(daily["date"], daily["commit_count"])) == {
        date(2024, 6, 1): 1, date(2024, 6, 2): 2, date(2024, 6, 3): 3,
    }
