from sqlalchemy import text, func, distinct
import pandas as pd

from src.data.repo.repo import BaseRepository
from src.storage.models.models import GitHubCommit, GitHubPullRequest, WeatherObservation


def _day(value):
    if value is None:
        return None
    if isinstance(value, str):
        return value[:10]
    return value.strftime("%Y-%m-%d")


class CorrelationRepository(BaseRepository):
    def __init__(self, database_url: str | None = None):
        super().__init__(database_url)

    # ----------- LOADERS -----------

    def load_commits(self) -> pd.DataFrame:
        with self.session_scope() as session:
            query = text("""
                SELECT
                    sha,
                    repo_name,
                    commit_date,
                    additions,
                    deletions
                FROM github_commits
                WHERE commit_date IS NOT NULL
                ORDER BY commit_date
            """)
            return pd.read_sql(query, session.connection(), parse_dates=["commit_date"])

    def load_weather(self) -> pd.DataFrame:
        with self.session_scope() as session:
            query = text("""
                SELECT
                    date,
                    temp_avg,
                    precipitation,
                    daylight_hours
                FROM weather_data
                ORDER BY date
            """)
            return pd.read_sql(query, session.connection())

    def load_overview_stats(self) -> dict:
        with self.session_scope() as session:
            total_commits, total_repos, first_commit, last_commit = session.query(
                func.count(GitHubCommit.id),
                func.count(distinct(GitHubCommit.repo_name)),
                func.min(GitHubCommit.commit_date),
                func.max(GitHubCommit.commit_date),
            ).one()

            total_prs, merged_prs = session.query(
                func.count(GitHubPullRequest.id),
                func.count(GitHubPullRequest.merged_at),
            ).one()

            weather_days, first_day, last_day = session.query(
                func.count(WeatherObservation.id),
                func.min(WeatherObservation.date),
                func.max(WeatherObservation.date),
            ).one()

        return {
            "commits": {
                "total_commits": total_commits,
                "total_repos": total_repos,
                "date_range_start": _day(first_commit),
                "date_range_end": _day(last_commit),
            },
            "pull_requests": {
                "total_prs": total_prs,
                "merged_prs": merged_prs,
            },
            "weather": {
                "weather_days": weather_days,
                "date_range_start": _day(first_day),
                "date_range_end": _day(last_day),
            },
        }
