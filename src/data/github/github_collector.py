import concurrent.futures
import logging
import os
from datetime import datetime, timedelta, timezone as dt_timezone

import requests
from sqlalchemy.exc import SQLAlchemyError

from src.data.repo.repo import CommitRepository, PullRequestRepository
from src.storage.unit_of_work import UnitOfWork
from src.utils.utils import clean_message, to_local_datetime
from .github_client import GitHubClient, GitHubAPIError

logger = logging.getLogger(__name__)

# malformed payloads and timestamps raise ValueError (JSON decoding included)
REPOSITORY_ERRORS = (GitHubAPIError, ValueError, requests.exceptions.RequestException, SQLAlchemyError)


class GitHubActivityCollector:
    def __init__(self, token=None, max_workers=None, database_url=None,
                 since_years=2, timezone='America/New_York'):
        self.token = token or os.getenv('GITHUB_TOKEN')
        self.max_workers = max_workers or 1
        self.database_url = database_url
        self.since_years = since_years
        self.timezone = timezone

        if database_url:
            UnitOfWork(database_url).create_tables()

    def since_timestamp(self, now=None):
        now = now or datetime.now(dt_timezone.utc)
        since = now - timedelta(days=365 * self.since_years)
        return since.strftime("%Y-%m-%dT%H:%M:%SZ")

    def collect(self):
        client = GitHubClient(self.token)
        repositories = [repo for repo in client.get_user_repos() if not repo.get('private')]
        logger.info("Found %d public repositories", len(repositories))

        since = self.since_timestamp()
        uow = UnitOfWork(self.database_url)
        commit_repo = CommitRepository(self.database_url)
        commit_repo.uow = uow
        pr_repo = PullRequestRepository(self.database_url)
        pr_repo.uow = uow

        total_commits = 0
        total_prs = 0

        try:
            with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                future_to_repo = {
                    executor.submit(
                        _process_repository,
                        GitHubClient(self.token), repo, since, commit_repo, pr_repo, self.timezone
                    ): repo['full_name'] for repo in repositories
                }

                for future in concurrent.futures.as_completed(future_to_repo):
                    full_name = future_to_repo[future]
                    result = future.result()
                    total_commits += result['commits_count']
                    total_prs += result['prs_count']
                    logger.info("%s completed: %d commits, %d PRs",
                                full_name, result['commits_count'], result['prs_count'])
        finally:
            uow.dispose()

        logger.info("FINISHED: %d repos, %d commits, %d PRs", len(repositories), total_commits, total_prs)

        return {
            'repos_processed': len(repositories),
            'commits_added': total_commits,
            'prs_added': total_prs
        }


def _extract_commit_details(commit_data, detail, repo_full_name, timezone):
    commit_info = commit_data.get('commit') or {}
    author_info = commit_info.get('author') or {}
    date_str = author_info.get('date')
    if not commit_data.get('sha') or not date_str:
        return None

    author = (commit_data.get('author') or {}).get('login') or author_info.get('name')
    detail = detail or {}
    stats = detail.get('stats') or {}

    return {
        'sha': commit_data['sha'],
        'repo_name': repo_full_name,
        'author': author,
        'commit_date': to_local_datetime(date_str, timezone),
        'message': clean_message(commit_info.get('message'), max_length=5000),
        'additions': stats.get('additions', 0),
        'deletions': stats.get('deletions', 0),
        'files_changed': len(detail.get('files') or []),
    }


def _extract_pull_request(pr_data, repo_full_name, timezone):
    if pr_data.get('number') is None or not pr_data.get('created_at'):
        return None

    merged_at = pr_data.get('merged_at')
    return {
        'pr_number': pr_data['number'],
        'repo_name': repo_full_name,
        'title': pr_data.get('title'),
        'created_at': to_local_datetime(pr_data['created_at'], timezone),
        'merged_at': to_local_datetime(merged_at, timezone) if merged_at else None,
        # the list endpoint usually leaves these out
        'additions': pr_data.get('additions') or 0,
        'deletions': pr_data.get('deletions') or 0,
        'files_changed': pr_data.get('changed_files') or 0,
    }


def _collect_commits(client, owner, name, full_name, since, commit_repo, timezone):
    added = 0
    for commit_data in client.get_repo_commits(owner, name, since):
        sha = commit_data.get('sha')
        if not sha or commit_repo.exists(sha):
            continue

        try:
            detail = client.get_commit(owner, name, sha)
        except REPOSITORY_ERRORS as e:
            logger.warning("Failed to get stats for commit %s: %s", sha, e)
            detail = None

        commit = _extract_commit_details(commit_data, detail, full_name, timezone)
        if commit and commit_repo.insert_commit(commit):
            added += 1
    return added


def _collect_pull_requests(client, owner, name, full_name, pr_repo, timezone):
    added = 0
    for pr_data in client.get_repo_pull_requests(owner, name, "all"):
        pr = _extract_pull_request(pr_data, full_name, timezone)
        if pr is None or pr_repo.exists(full_name, pr['pr_number']):
            continue
        if pr_repo.insert_pull_request(pr):
            added += 1
    return added


def _process_repository(client, repo, since, commit_repo, pr_repo, timezone):
    """Sync one repository. Failures are logged per phase and never abort the whole sync."""
    full_name = repo['full_name']
    owner, name = full_name.split('/', 1)
    commits_count = 0
    prs_count = 0

    try:
        commits_count = _collect_commits(client, owner, name, full_name, since, commit_repo, timezone)
    except REPOSITORY_ERRORS as e:
        logger.warning("Failed to fetch commits for %s: %s", full_name, e)

    try:
        prs_count = _collect_pull_requests(client, owner, name, full_name, pr_repo, timezone)
    except REPOSITORY_ERRORS as e:
        logger.warning("Failed to fetch PRs for %s: %s", full_name, e)

    return {
        'repo': full_name,
        'commits_count': commits_count,
        'prs_count': prs_count
    }
