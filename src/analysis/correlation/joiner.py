"""
Per-day alignment of commit activity with weather observations.

Commits are bucketed by the calendar day of their timestamp and inner-joined
with the weather table on that day. Days present on only one side are
dropped; `count_unpaired_days` reports how many.

`prepare_commits` / `prepare_weather` turn raw repository rows into the
frames the `*_from` functions expect, so a caller running several reductions
over the same data prepares it once.
"""

import pandas as pd

DAILY_METRIC_COLUMNS = ["date", "commit_count", "lines_changed", "temp", "precipitation", "daylight_hours"]

WEATHER_VALUE_COLUMNS = ["temp_avg", "precipitation", "daylight_hours"]


def commit_timestamps(commit_date: pd.Series, timezone: str | None = None) -> pd.Series:
    """
    Parse commit timestamps. Timezone-aware values are converted to `timezone`
    and made naive; naive values are taken as already being local wall-clock time.
    """
    stamps = pd.to_datetime(commit_date)
    if stamps.dt.tz is not None:
        if timezone:
            stamps = stamps.dt.tz_convert(timezone)
        stamps = stamps.dt.tz_localize(None)
    return stamps


def prepare_commits(commits: pd.DataFrame, timezone: str | None = None) -> pd.DataFrame:
    """Add the join key (`day`), the commit `month` and `lines_changed` to raw commit rows."""
    frame = commits.copy()
    if frame.empty:
        return frame.assign(day=pd.Series(dtype=object), month=pd.Series(dtype=int),
                            lines_changed=pd.Series(dtype=int))
    stamps = commit_timestamps(frame["commit_date"], timezone)
    frame["day"] = stamps.dt.date
    frame["month"] = stamps.dt.month
    frame["lines_changed"] = (
        frame["additions"].fillna(0).astype(int) + frame["deletions"].fillna(0).astype(int)
    )
    return frame


def prepare_weather(weather: pd.DataFrame) -> pd.DataFrame:
    """
    Normalise weather dates to `datetime.date`. Missing readings stay NaN so
    that averages skip them; `daily_metrics_from` coalesces them to 0.
    """
    frame = weather.copy()
    if frame.empty:
        return frame
    frame["date"] = pd.to_datetime(frame["date"]).dt.date
    for column in WEATHER_VALUE_COLUMNS:
        frame[column] = frame[column].astype(float)
    return frame


def daily_metrics_from(commits: pd.DataFrame, weather: pd.DataFrame) -> pd.DataFrame:
    """`build_daily_metrics` over frames already passed through the prepare functions."""
    if commits.empty or weather.empty:
        return pd.DataFrame(columns=DAILY_METRIC_COLUMNS)

    per_day = (
        commits.groupby("day")
        .agg(commit_count=("lines_changed", "size"), lines_changed=("lines_changed", "sum"))
        .reset_index()
    )

    daily = per_day.merge(
        weather[["date"] + WEATHER_VALUE_COLUMNS].rename(columns={"date": "day", "temp_avg": "temp"}),
        how="inner",
        on="day",
    )

    daily = (
        daily.rename(columns={"day": "date"})
        .sort_values("date", kind="mergesort")
        .reset_index(drop=True)
        .fillna({"temp": 0, "precipitation": 0, "daylight_hours": 0})
    )
    daily["commit_count"] = daily["commit_count"].astype(int)
    daily["lines_changed"] = daily["lines_changed"].astype(int)
    return daily[DAILY_METRIC_COLUMNS]


def build_daily_metrics(commits: pd.DataFrame, weather: pd.DataFrame,
                        timezone: str | None = None) -> pd.DataFrame:
    """
    One row per calendar day that has at least one commit and a weather observation,
    ascending by date. Missing weather readings are reported as 0.
    """
    return daily_metrics_from(prepare_commits(commits, timezone), prepare_weather(weather))


def unpaired_days_from(commits: pd.DataFrame, weather: pd.DataFrame) -> dict:
    commit_days = set(commits["day"]) if not commits.empty else set()
    weather_days = set(weather["date"]) if not weather.empty else set()
    return {
        "commit_days_without_weather": len(commit_days - weather_days),
        "weather_days_without_commits": len(weather_days - commit_days),
    }


def count_unpaired_days(commits: pd.DataFrame, weather: pd.DataFrame,
                        timezone: str | None = None) -> dict:
    return unpaired_days_from(prepare_commits(commits, timezone), prepare_weather(weather))
