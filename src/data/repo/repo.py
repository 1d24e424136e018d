from contextlib import contextmanager

from sqlalchemy.dialects import postgresql, sqlite

from src.storage.unit_of_work import UnitOfWork
from src.utils.utils import parse_day
from src.storage.models.models import GitHubCommit, GitHubPullRequest, WeatherObservation


def _insert(session, model):
    """Dialect-specific INSERT supporting ON CONFLICT"""
    if session.get_bind().dialect.name == 'postgresql':
        return postgresql.insert(model)
    return sqlite.insert(model)


class BaseRepository:
    def __init__(self, database_url: str = None):
        self.database_url = database_url
        self._uow = None

    @property
    def uow(self):
        if self._uow is None:
            self._uow = UnitOfWork(self.database_url)
        return self._uow

    @uow.setter
    def uow(self, value):
        self._uow = value

    @contextmanager
    def session_scope(self):
        """Session bound to the shared UnitOfWork"""
        session = self.uow.get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


class CommitRepository(BaseRepository):
    def __init__(self, database_url: str = None):
        super().__init__(database_url)

    def exists(self, sha: str) -> bool:
        with self.session_scope() as session:
            count = session.query(GitHubCommit).filter(GitHubCommit.sha == sha).count()
            return count > 0

    def distinct_commit_dates(self):
        """Calendar days with at least one commit, ascending"""
        with self.session_scope() as session:
            rows = session.query(GitHubCommit.commit_date).all()
        return sorted({row[0].date() for row in rows if row[0] is not None})

    def insert_commit(self, commit_data) -> bool:
        """Insert a commit unless its sha is already stored. Returns True if a row was added."""
        with self.session_scope() as session:
            stmt = _insert(session, GitHubCommit).values(
                sha=commit_data['sha'],
                repo_name=commit_data['repo_name'],
                author=commit_data.get('author') or 'unknown',
                commit_date=commit_data['commit_date'],
                message=commit_data.get('message'),
                additions=commit_data.get('additions', 0),
                deletions=commit_data.get('deletions', 0),
                files_changed=commit_data.get('files_changed', 0)
            ).on_conflict_do_nothing(index_elements=['sha'])
            result = session.execute(stmt)
            return result.rowcount > 0


class PullRequestRepository(BaseRepository):
    def __init__(self, database_url: str = None):
        super().__init__(database_url)

    def exists(self, repo_name: str, pr_number: int) -> bool:
        with self.session_scope() as session:
            count = session.query(GitHubPullRequest).filter(
                GitHubPullRequest.repo_name == repo_name,
                GitHubPullRequest.pr_number == pr_number
            ).count()
            return count > 0

    def insert_pull_request(self, pr_data) -> bool:
        with self.session_scope() as session:
            stmt = _insert(session, GitHubPullRequest).values(
                pr_number=pr_data['pr_number'],
                repo_name=pr_data['repo_name'],
                title=pr_data.get('title'),
                created_at=pr_data['created_at'],
                merged_at=pr_data.get('merged_at'),
                additions=pr_data.get('additions', 0),
                deletions=pr_data.get('deletions', 0),
                files_changed=pr_data.get('files_changed', 0)
            ).on_conflict_do_nothing(index_elements=['repo_name', 'pr_number'])
            result = session.execute(stmt)
            return result.rowcount > 0


class WeatherRepository(BaseRepository):
    def __init__(self, database_url: str = None):
        super().__init__(database_url)

    def insert_observation(self, weather_data, location: str) -> bool:
        """Weather rows are immutable: an already stored date is left untouched."""
        with self.session_scope() as session:
            stmt = _insert(session, WeatherObservation).values(
                date=parse_day(weather_data['date']),
                location=location,
                temp_min=weather_data.get('temp_min'),
                temp_max=weather_data.get('temp_max'),
                temp_avg=weather_data.get('temp_avg'),
                precipitation=weather_data.get('precipitation', 0),
                humidity=weather_data.get('humidity'),
                cloud_cover=weather_data.get('cloud_cover'),
                daylight_hours=weather_data.get('daylight_hours')
            ).on_conflict_do_nothing(index_elements=['date'])
            result = session.execute(stmt)
            return result.rowcount > 0
