"""GitHub REST API client for listing open pull requests."""

import logging
from typing import Any, Optional

import requests

from .models import (
    FetchErrorKind,
    FetchFailure,
    FetchResult,
    FetchSuccess,
    PullRequestRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100
DEFAULT_TIMEOUT = 30
MAX_REPO_PAGES = 50

BAD_CREDENTIALS = "Bad credentials"
NOT_FOUND = "Not Found"


class GitHubAPIError(Exception):
    pass


class InvalidCredentialsError(GitHubAPIError):
    pass


def classify_failure(status_code: Optional[int], payload: Any) -> FetchFailure:
    """Map an error response to the kind of failure it represents."""
    message = ""
    if isinstance(payload, dict):
        message = str(payload.get("message") or "")
    elif payload:
        message = str(payload)

    if message == BAD_CREDENTIALS or status_code == 401:
        return FetchFailure(FetchErrorKind.INVALID_CREDENTIALS, message or BAD_CREDENTIALS)
    if message == NOT_FOUND or status_code == 404:
        return FetchFailure(FetchErrorKind.REPO_NOT_FOUND, message or NOT_FOUND)
    return FetchFailure(FetchErrorKind.UNKNOWN, message or f"HTTP {status_code}")


def parse_pull(item: dict) -> PullRequestRecord:
    url = item.get("html_url") or item["_links"]["html"]["href"]
    return PullRequestRecord(
        author=item["user"]["login"],
        title=item.get("title") or "",
        number=item["number"],
        url=url,
    )


class GitHubClient:
    """Handles all communication with the GitHub REST API."""

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })
        if token:
            self.session.headers["Authorization"] = f"token {token}"
        elif username and password:
            self.session.auth = (username, password)

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        return self.session.request(method, f"{self.BASE_URL}{endpoint}", timeout=self.timeout, **kwargs)

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    def fetch_open_prs(self, org: str, repo: str) -> FetchResult:
        """List the open pull requests of ``org/repo`` with a single request."""
        endpoint = f"/repos/{org}/{repo}/pulls"
        try:
            response = self._request(
                "GET", endpoint, params={"state": "open", "per_page": DEFAULT_PER_PAGE}
            )
        except requests.exceptions.RequestException as e:
            logger.debug("Request for %s/%s failed: %s", org, repo, e)
            return FetchFailure(FetchErrorKind.UNKNOWN, str(e))

        payload = self._json(response)
        if response.status_code >= 400 or not isinstance(payload, list):
            failure = classify_failure(response.status_code, payload)
            logger.debug("GET %s -> %s (%s)", endpoint, response.status_code, failure.kind.value)
            return failure

        records = []
        for item in payload:
            try:
                records.append(parse_pull(item))
            except (KeyError, TypeError) as e:
                logger.warning("Skipping malformed pull request in %s/%s: %r", org, repo, e)
        logger.debug("GET %s -> %d open pull requests", endpoint, len(records))
        return FetchSuccess(records)

    def get_paginated(self, endpoint: str, params: Optional[dict] = None,
                      max_pages: int = MAX_REPO_PAGES) -> list:
        """Fetch all pages of a paginated endpoint."""
        params = dict(params or {})
        params.setdefault("per_page", DEFAULT_PER_PAGE)
        all_items = []

        for page in range(1, max_pages + 1):
            params["page"] = page
            try:
                response = self._request("GET", endpoint, params=params)
            except requests.exceptions.RequestException as e:
                raise GitHubAPIError(f"Request to {endpoint} failed: {e}") from e

            items = self._json(response)
            if response.status_code >= 400 or not isinstance(items, list):
                failure = classify_failure(response.status_code, items)
                if failure.kind is FetchErrorKind.INVALID_CREDENTIALS:
                    raise InvalidCredentialsError(failure.message)
                raise GitHubAPIError(f"{endpoint}: {failure.message}")
            all_items.extend(items)
            if len(items) < params["per_page"]:
                break

        return all_items

    def list_org_repos(self, org: str) -> list[str]:
        """Names of every repository in ``org``, sorted."""
        repos = self.get_paginated(f"/orgs/{org}/repos")
        return sorted(repo["name"] for repo in repos)
