from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Float, Date, DateTime, Index, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class GitHubCommit(Base):
    __tablename__ = 'github_commits'

    id = Column(Integer, primary_key=True, autoincrement=True)
    sha = Column(String(100), unique=True, nullable=False)
    repo_name = Column(String(255), nullable=False)
    author = Column(String(255), nullable=False)
    # wall-clock time in the weather location's timezone
    commit_date = Column(DateTime, nullable=False)
    message = Column(Text)
    additions = Column(Integer, default=0)
    deletions = Column(Integer, default=0)
    files_changed = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index('idx_commits_date', 'commit_date'),
        Index('idx_commits_repo', 'repo_name'),
    )


class GitHubPullRequest(Base):
    __tablename__ = 'github_pull_requests'

    id = Column(Integer, primary_key=True, autoincrement=True)
    pr_number = Column(Integer, nullable=False)
    repo_name = Column(String(255), nullable=False)
    title = Column(Text)
    created_at = Column(DateTime, nullable=False)
    merged_at = Column(DateTime)
    additions = Column(Integer, default=0)
    deletions = Column(Integer, default=0)
    files_changed = Column(Integer, default=0)
    stored_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('repo_name', 'pr_number', name='uq_pull_requests_repo_number'),
        Index('idx_prs_date', 'created_at'),
    )


class WeatherObservation(Base):
    __tablename__ = 'weather_data'

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, unique=True, nullable=False)
    location = Column(String(100), default='NYC')
    temp_min = Column(Float)        # °F
    temp_max = Column(Float)
    temp_avg = Column(Float)
    precipitation = Column(Float, default=0)   # inches
    humidity = Column(Integer)      # %
    cloud_cover = Column(Integer)   # %
    daylight_hours = Column(Float)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index('idx_weather_date', 'date'),
    )


class AnalysisCache(Base):
    """Reserved for precomputed metrics; nothing reads or writes it yet."""
    __tablename__ = 'analysis_cache'

    id = Column(Integer, primary_key=True, autoincrement=True)
    metric_type = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)
    value = Column(Float, nullable=False)
    weather_factor = Column(String(100))
    created_at = Column(DateTime, default=datetime.utcnow)
