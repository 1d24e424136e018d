"""Response schemas. Field names are served in camelCase for the dashboard."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DailyMetric(CamelModel):
    date: str
    commit_count: int
    lines_changed: int
    temp: float
    precipitation: float
    daylight_hours: float


class SeasonalStat(CamelModel):
    season: str
    commit_count: int
    avg_commits_per_day: float
    avg_lines_changed: float
    avg_temp: float
    avg_precipitation: float


class TempRangeBucket(CamelModel):
    temp_range: str
    commit_count: int
    avg_lines_changed: float


class PrecipCategory(CamelModel):
    precip_category: str
    commit_count: int
    avg_commits_per_day: float


class CorrelationResult(CamelModel):
    temp_vs_commits: float
    precip_vs_commits: float
    daylight_vs_commits: float


class CorrelationsResponse(CamelModel):
    daily_metrics: List[DailyMetric]
    seasonal_stats: List[SeasonalStat]
    commits_by_temp: List[TempRangeBucket]
    commits_by_precip: List[PrecipCategory]
    correlations: CorrelationResult


# The overview keeps the storage column names inside each section
class CommitOverview(BaseModel):
    total_commits: int
    total_repos: int
    date_range_start: Optional[str] = None
    date_range_end: Optional[str] = None


class PullRequestOverview(BaseModel):
    total_prs: int
    merged_prs: int


class WeatherOverview(BaseModel):
    weather_days: int
    date_range_start: Optional[str] = None
    date_range_end: Optional[str] = None


class StatsResponse(CamelModel):
    commits: CommitOverview
    pull_requests: PullRequestOverview
    weather: WeatherOverview
