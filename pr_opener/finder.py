from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from rich.console import Console
from rich.markup import escape

from .config import Settings
from .github_api import InvalidCredentialsError
from .models import FetchErrorKind, FetchFailure, FetchResult
from .store import PRStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str, int, int], None]


class PullRequestSource(Protocol):
    def fetch_open_prs(self, org: str, repo: str) -> FetchResult: ...


def credentials_message(settings: Settings) -> str:
    kind = "auth token" if settings.uses_token else "username/password combo"
    return (
        f"Error: Invalid {kind} used. Exiting immediately since future requests"
        " cannot succeed"
    )


def find_prs(
    client: PullRequestSource,
    settings: Settings,
    on_progress: Optional[ProgressCallback] = None,
    console: Optional[Console] = None,
) -> PRStore:
    """Fetch the open pull requests of every configured repository.

    Only pull requests by ``settings.authors`` are stored. A missing
    repository or an unexpected API error skips that repository; bad
    credentials raise ``InvalidCredentialsError`` since no later request can
    succeed either.
    """
    console = console or Console()
    store = PRStore()
    total = len(settings.repos)

    for index, repo in enumerate(settings.repos, start=1):
        if on_progress:
            on_progress(settings.org, repo, index, total)

        result = client.fetch_open_prs(settings.org, repo)
        if isinstance(result, FetchFailure):
            _report_failure(result, settings, repo, console)
            continue

        for record in result.records:
            author = record.author.strip().lower()
            if author in settings.authors:
                store.add(author, repo, record.title, record.number, record.url)

    logger.info("Found %d matching pull requests in %d repositories", len(store), total)
    return store


def _report_failure(failure: FetchFailure, settings: Settings, repo: str, console: Console) -> None:
    if failure.kind is FetchErrorKind.INVALID_CREDENTIALS:
        raise InvalidCredentialsError(credentials_message(settings))

    if failure.kind is FetchErrorKind.REPO_NOT_FOUND:
        logger.debug("Repository %s/%s not found", settings.org, repo)
        console.print(f"\n[red]Error: No repo called {escape(repo)} found in {escape(settings.org)}[/red]")
    else:
        logger.debug("Listing pull requests for %s/%s failed: %s", settings.org, repo, failure.message)
        console.print(
            f"\n[red]Unknown error encountered {escape(failure.message)}, while getting PRs"
            f" for {escape(repo)} in {escape(settings.org)}[/red]"
        )
