from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class PullRequest:
    title: str
    number: str
    url: str


@dataclass(frozen=True)
class PullRequestRecord:
    """One open pull request as listed by the API, before author filtering."""

    author: str
    title: str
    number: int
    url: str


class FetchErrorKind(Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    REPO_NOT_FOUND = "repo_not_found"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FetchSuccess:
    records: list[PullRequestRecord] = field(default_factory=list)


@dataclass(frozen=True)
class FetchFailure:
    kind: FetchErrorKind
    message: str = ""


FetchResult = Union[FetchSuccess, FetchFailure]
