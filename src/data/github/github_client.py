import logging
import re
import time

import requests

logger = logging.getLogger(__name__)

NEXT_LINK_RE = re.compile(r'<([^>]+)>;\s*rel="next"')


class GitHubAPIError(Exception):
    pass


def wait_for_rate_limit(reset_time):
    """Wait for rate limit reset"""
    current_time = time.time()
    sleep_time = max(reset_time - current_time, 0) + 5

    if sleep_time > 300:
        logger.warning("Long wait: %.1f minutes", sleep_time / 60)
        for i in range(int(sleep_time / 60)):
            remaining = sleep_time - i * 60
            logger.info("   Remaining: %.1f minutes", remaining / 60)
            time.sleep(60)
        time.sleep(sleep_time % 60)
    else:
        logger.info("Waiting: %.0f seconds", sleep_time)
        time.sleep(sleep_time)


class GitHubClient:
    def __init__(self, token=None, max_retries=3):
        self.base_url = "https://api.github.com"
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "GitHub-Weather-Analysis"
        }

        self.token = token
        if token:
            self.headers["Authorization"] = f"token {token}"

        self.session = requests.Session()
        self.session.headers.update(self.headers)

        self.max_retries = max_retries
        self.core_remaining = 5000

    def make_request(self, url, params=None, _attempt=0):
        """Safe request with rate limit checking"""
        try:
            response = self.session.get(url, params=params, timeout=30)
        except requests.exceptions.RequestException as e:
            if _attempt >= self.max_retries:
                raise GitHubAPIError(f"Request to {url} failed after {_attempt + 1} attempts: {e}") from e
            logger.warning("Request error: %s, retrying", e)
            time.sleep(5)
            return self.make_request(url, params, _attempt + 1)

        if 'X-RateLimit-Remaining' in response.headers:
            self.core_remaining = int(response.headers['X-RateLimit-Remaining'])

        if response.status_code == 403:
            # Check if this is really rate limit or other 403 error
            rate_limit_remaining = response.headers.get('X-RateLimit-Remaining')
            reset_time = response.headers.get('X-RateLimit-Reset')

            if rate_limit_remaining == '0' and reset_time:
                logger.warning("Core API limit exceeded! Remaining requests: %s", rate_limit_remaining)
                wait_for_rate_limit(int(reset_time))
                return self.make_request(url, params, _attempt)

            logger.error("Error 403: No access to %s", url)

        elif response.status_code != 200:
            logger.error("Error %s for %s: %s", response.status_code, url, response.text[:200])

        return response

    def get_json(self, url, params=None):
        response = self.make_request(url, params=params)
        if response.status_code != 200:
            raise GitHubAPIError(f"GitHub API error {response.status_code} for {url}")
        return response.json()

    def paginate(self, url, params=None):
        """Collect every page of a list endpoint by following the Link header"""
        items = []
        params = {"per_page": 100, **(params or {})}

        while url:
            response = self.make_request(url, params=params)
            if response.status_code != 200:
                raise GitHubAPIError(f"GitHub API error {response.status_code} for {url}")

            page = response.json()
            if not isinstance(page, list):
                raise GitHubAPIError(f"Expected a list from {url}")
            items.extend(page)

            match = NEXT_LINK_RE.search(response.headers.get('Link', ''))
            url = match.group(1) if match else None
            # the next link already carries the query string
            params = None

        return items

    def check_auth(self) -> bool:
        if not self.token:
            return False
        try:
            response = self.make_request(f"{self.base_url}/user")
        except GitHubAPIError:
            return False
        return response.status_code == 200

    def get_user_repos(self):
        return self.paginate(f"{self.base_url}/user/repos")

    def get_repo_commits(self, owner, repo, since=None):
        params = {"since": since} if since else None
        return self.paginate(f"{self.base_url}/repos/{owner}/{repo}/commits", params=params)

    def get_commit(self, owner, repo, sha):
        return self.get_json(f"{self.base_url}/repos/{owner}/{repo}/commits/{sha}")

    def get_repo_pull_requests(self, owner, repo, state="all"):
        return self.paginate(f"{self.base_url}/repos/{owner}/{repo}/pulls", params={"state": state})
