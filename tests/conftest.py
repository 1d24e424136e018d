from datetime import date, datetime

import pandas as pd
import pytest

from src.storage.models.models import GitHubCommit, GitHubPullRequest, WeatherObservation
from src.storage.unit_of_work import UnitOfWork


def make_commits(rows):
    """rows: (commit_date, additions, deletions)"""
    return pd.DataFrame(
        [
            {"sha": f"sha{i}", "repo_name": "me/repo", "commit_date": stamp,
             "additions": additions, "deletions": deletions}
            for i, (stamp, additions, deletions) in enumerate(rows)
        ],
        columns=["sha", "repo_name", "commit_date", "additions", "deletions"],
    )


def make_weather(rows):
    """rows: (date, temp_avg, precipitation, daylight_hours)"""
    return pd.DataFrame(
        [
            {"date": day, "temp_avg": temp, "precipitation": precip, "daylight_hours": daylight}
            for day, temp, precip, daylight in rows
        ],
        columns=["date", "temp_avg", "precipitation", "daylight_hours"],
    )


@pytest.fixture
def database_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'test.db'}"
    uow = UnitOfWork(url)
    uow.create_tables()
    uow.dispose()
    return url


@pytest.fixture
def seeded_database_url(database_url):
    uow = UnitOfWork(database_url)
    with uow.session_scope() as session:
        session.add_all([
            GitHubCommit(sha="a1", repo_name="me/one", author="me",
                         commit_date=datetime(2024, 1, 15, 9, 30), additions=10, deletions=5),
            GitHubCommit(sha="a2", repo_name="me/one", author="me",
                         commit_date=datetime(2024, 1, 15, 14, 0), additions=20, deletions=0),
            GitHubCommit(sha="a3", repo_name="me/two", author="me",
                         commit_date=datetime(2024, 1, 15, 23, 59), additions=0, deletions=15),
            # no weather for this day
            GitHubCommit(sha="b1", repo_name="me/two", author="me",
                         commit_date=datetime(2024, 7, 4, 12, 0), additions=1, deletions=1),
            GitHubPullRequest(pr_number=1, repo_name="me/one", title="first",
                              created_at=datetime(2024, 1, 10), merged_at=datetime(2024, 1, 11)),
            GitHubPullRequest(pr_number=2, repo_name="me/one", title="second",
                              created_at=datetime(2024, 1, 12)),
            WeatherObservation(date=date(2024, 1, 15), location="NYC", temp_min=20, temp_max=35,
                               temp_avg=28, precipitation=0, humidity=60, cloud_cover=40,
                               daylight_hours=9.0),
            WeatherObservation(date=date(2024, 1, 16), location="NYC", temp_min=25, temp_max=40,
                               temp_avg=33, precipitation=0.2, humidity=70, cloud_cover=90,
                               daylight_hours=9.1),
        ])
    uow.dispose()
    return database_url
