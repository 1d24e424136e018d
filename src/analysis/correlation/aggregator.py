"""
Categorical breakdowns of commit activity by weather.

All three reductions run over the commit x weather population: one row per
commit whose day has a weather observation. Groups without members are
omitted and undefined averages become 0. Missing weather readings are
skipped by the averages and by the band they would be classified into.
"""

import pandas as pd

from src.analysis.correlation.classify import (
    SEASONS,
    classify_season,
    classify_temp_bucket,
    classify_precip_bucket,
)
from src.analysis.correlation.joiner import prepare_commits, prepare_weather

SEASONAL_COLUMNS = [
    "season", "commit_count", "avg_commits_per_day", "avg_lines_changed", "avg_temp", "avg_precipitation"
]
TEMP_RANGE_COLUMNS = ["temp_range", "commit_count", "avg_lines_changed"]
PRECIP_COLUMNS = ["precip_category", "commit_count", "avg_commits_per_day"]
ROW_COLUMNS = ["day", "month", "lines_changed", "temp_avg", "precipitation"]


def safe_ratio(numerator, denominator) -> float:
    if not denominator:
        return 0.0
    return float(numerator) / float(denominator)


def commit_weather_rows_from(commits: pd.DataFrame, weather: pd.DataFrame) -> pd.DataFrame:
    """Inner join of individual prepared commits with the weather of their day."""
    if commits.empty or weather.empty:
        return pd.DataFrame(columns=ROW_COLUMNS)

    rows = commits[["day", "month", "lines_changed"]].merge(
        weather[["date", "temp_avg", "precipitation"]],
        how="inner",
        left_on="day",
        right_on="date",
    )
    return rows.drop(columns=["date"])


def commit_weather_rows(commits: pd.DataFrame, weather: pd.DataFrame,
                        timezone: str | None = None) -> pd.DataFrame:
    """Inner join of individual commits with the weather of their day."""
    return commit_weather_rows_from(prepare_commits(commits, timezone), prepare_weather(weather))


def seasonal_stats(rows: pd.DataFrame) -> pd.DataFrame:
    """Per-season totals and averages, Winter first."""
    if rows.empty:
        return pd.DataFrame(columns=SEASONAL_COLUMNS)

    grouped = (
        rows.assign(season=rows["month"].map(classify_season))
        .groupby("season")
        .agg(
            commit_count=("day", "size"),
            days=("day", "nunique"),
            avg_lines_changed=("lines_changed", "mean"),
            avg_temp=("temp_avg", "mean"),
            avg_precipitation=("precipitation", "mean"),
        )
    )
    grouped = grouped.reindex([season for season in SEASONS if season in grouped.index])

    grouped["avg_commits_per_day"] = [
        safe_ratio(count, days) for count, days in zip(grouped["commit_count"], grouped["days"])
    ]
    result = grouped.rename_axis("season").reset_index().fillna(
        {"avg_lines_changed": 0, "avg_temp": 0, "avg_precipitation": 0}
    )
    result["commit_count"] = result["commit_count"].astype(int)
    return result[SEASONAL_COLUMNS]


def commits_by_temp_range(rows: pd.DataFrame) -> pd.DataFrame:
    """Commits per temperature band, coldest observed band first. Days without a reading are left out."""
    rows = rows.dropna(subset=["temp_avg"])
    if rows.empty:
        return pd.DataFrame(columns=TEMP_RANGE_COLUMNS)

    grouped = (
        rows.assign(temp_range=rows["temp_avg"].map(classify_temp_bucket))
        .groupby("temp_range")
        .agg(
            commit_count=("day", "size"),
            avg_lines_changed=("lines_changed", "mean"),
            min_temp=("temp_avg", "min"),
        )
        .sort_values("min_temp", kind="mergesort")
        .reset_index()
        .fillna({"avg_lines_changed": 0})
    )
    grouped["commit_count"] = grouped["commit_count"].astype(int)
    return grouped[TEMP_RANGE_COLUMNS]


def commits_by_precipitation(rows: pd.DataFrame) -> pd.DataFrame:
    """Commits per precipitation band, driest band first. Days without a reading are left out."""
    rows = rows.dropna(subset=["precipitation"])
    if rows.empty:
        return pd.DataFrame(columns=PRECIP_COLUMNS)

    grouped = (
        rows.assign(precip_category=rows["precipitation"].map(classify_precip_bucket))
        .groupby("precip_category")
        .agg(
            commit_count=("day", "size"),
            days=("day", "nunique"),
            mean_precipitation=("precipitation", "mean"),
        )
        .sort_values("mean_precipitation", kind="mergesort")
        .reset_index()
    )
    grouped["avg_commits_per_day"] = [
        safe_ratio(count, days) for count, days in zip(grouped["commit_count"], grouped["days"])
    ]
    grouped["commit_count"] = grouped["commit_count"].astype(int)
    return grouped[PRECIP_COLUMNS]
