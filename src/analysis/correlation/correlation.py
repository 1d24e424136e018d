#!/usr/bin/env python3
"""
Commit activity vs. weather correlation:

- Pearson(temperature,   commits per day)
- Pearson(precipitation, commits per day)
- Pearson(daylight,      commits per day)

plus seasonal / temperature / precipitation breakdowns.

Usage:

    from src.analysis.correlation.correlation import WeatherCorrelationAnalyzer

    analyzer = WeatherCorrelationAnalyzer(database_url)
    results = analyzer.analyze()
"""

import logging
from typing import Dict, Any, List

import numpy as np
import pandas as pd

from src.analysis.correlation.aggregator import (
    commit_weather_rows_from,
    seasonal_stats,
    commits_by_temp_range,
    commits_by_precipitation,
)
from src.analysis.correlation.joiner import (
    daily_metrics_from,
    prepare_commits,
    prepare_weather,
    unpaired_days_from,
)
from src.analysis.correlation.repo.repo import CorrelationRepository
from src.storage.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def pearson(x, y) -> float:
    """
    Pearson correlation coefficient of two equal-length series.

    Empty or zero-variance input gives 0.0 rather than NaN.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"series lengths differ: {x.size} != {y.size}")
    if x.size == 0 or np.ptp(x) == 0 or np.ptp(y) == 0:
        return 0.0

    # mean-centred two-pass form
    dx = x - x.mean()
    dy = y - y.mean()
    denominator = np.sqrt(np.dot(dx, dx) * np.dot(dy, dy))
    if denominator == 0:
        return 0.0
    return float(np.dot(dx, dy) / denominator)


def correlate(daily_metrics) -> Dict[str, float]:
    """Correlate each weather dimension of the daily series with its commit counts."""
    if not isinstance(daily_metrics, pd.DataFrame):
        daily_metrics = pd.DataFrame(list(daily_metrics))

    if daily_metrics.empty:
        return {
            "temp_vs_commits": 0.0,
            "precip_vs_commits": 0.0,
            "daylight_vs_commits": 0.0,
        }

    commits = daily_metrics["commit_count"]
    return {
        "temp_vs_commits": pearson(daily_metrics["temp"], commits),
        "precip_vs_commits": pearson(daily_metrics["precipitation"], commits),
        "daylight_vs_commits": pearson(daily_metrics["daylight_hours"], commits),
    }


def to_records(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    frame = frame.copy()
    if "date" in frame.columns:
        frame["date"] = frame["date"].map(lambda d: d.isoformat())
    return frame.to_dict(orient="records")


class WeatherCorrelationCore:
    def __init__(self, repo: CorrelationRepository, timezone: str | None = None):
        self.repo = repo
        self.timezone = timezone

    def run_analysis(self) -> Dict[str, Any]:
        commits = prepare_commits(self.repo.load_commits(), self.timezone)
        weather = prepare_weather(self.repo.load_weather())

        daily = daily_metrics_from(commits, weather)

        unpaired = unpaired_days_from(commits, weather)
        if unpaired["commit_days_without_weather"] or unpaired["weather_days_without_commits"]:
            logger.info(
                "Inner join dropped %d commit days without weather and %d weather days without commits",
                unpaired["commit_days_without_weather"],
                unpaired["weather_days_without_commits"],
            )
        logger.info("Correlating %d paired days", len(daily))

        rows = commit_weather_rows_from(commits, weather)

        return {
            "daily_metrics": to_records(daily),
            "seasonal_stats": to_records(seasonal_stats(rows)),
            "commits_by_temp": to_records(commits_by_temp_range(rows)),
            "commits_by_precip": to_records(commits_by_precipitation(rows)),
            "correlations": correlate(daily),
        }

    def overview(self) -> Dict[str, Any]:
        return self.repo.load_overview_stats()


class WeatherCorrelationAnalyzer:
    """
    High-level entry point used by the CLI and the HTTP API:

        analyzer = WeatherCorrelationAnalyzer(database_url)
        results = analyzer.analyze()
    """

    def __init__(self, database_url: str, timezone: str | None = None):
        self.database_url = database_url

        uow = UnitOfWork(database_url)
        uow.create_tables()

        repo = CorrelationRepository(database_url)
        repo.uow = uow
        self.core = WeatherCorrelationCore(repo, timezone)

    def analyze(self) -> Dict[str, Any]:
        return self.core.run_analysis()

    def overview(self) -> Dict[str, Any]:
        return self.core.overview()
