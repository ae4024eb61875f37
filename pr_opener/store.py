"""In-memory aggregation of the open pull requests found during a run."""

from __future__ import annotations

from .config import Settings
from .models import PullRequest


def number_key(repo: str, number: str | int) -> str:
    return f"{repo}:{number}"


class PRStore:
    """Holds found pull requests and provides lookups over them.

    ``by_author_repo`` maps author -> repository -> pull requests in the order
    they were added. ``by_number`` maps ``"repo:number"`` -> URL.
    """

    def __init__(self):
        self.by_author_repo: dict[str, dict[str, list[PullRequest]]] = {}
        self.by_number: dict[str, str] = {}
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def add(self, author: str, repo: str, title: str, number: str | int, url: str) -> None:
        author = author.strip().lower()
        number = str(number)

        if author not in self.by_author_repo:
            self.by_author_repo[author] = {}
        repos = self.by_author_repo[author]
        if repo not in repos:
            repos[repo] = []

        repos[repo].append(PullRequest(title=title, number=number, url=url))
        self.by_number[number_key(repo, number)] = url
        self._count += 1

    def authors(self) -> list[str]:
        return sorted(self.by_author_repo)

    def numbers(self) -> list[str]:
        return sorted(self.by_number)

    def urls_by_author(self, author: str) -> list[str]:
        repos = self.by_author_repo.get(author)
        if repos is None:
            return []
        return [pr.url for pulls in repos.values() for pr in pulls]

    def urls_by_number(self, key: str) -> list[str]:
        url = self.by_number.get(key)
        return [url] if url is not None else []

    def all_urls(self) -> list[str]:
        return [
            pr.url
            for repos in self.by_author_repo.values()
            for pulls in repos.values()
            for pr in pulls
        ]

    def render_summary(self, settings: Settings) -> str:
        """Status text for every pull request found, grouped by author then repo.

        Authors appear in the order their first pull request was added. Unless
        quiet, ends with a note naming the configured authors nobody found
        pull requests for.
        """
        indent = settings.indent
        lines = []
        for author, repos in self.by_author_repo.items():
            lines.append(author)
            for repo, pulls in repos.items():
                plural = "" if len(pulls) == 1 else "s"
                lines.append(f"{indent}{len(pulls)} PR{plural} against {repo}")

                if not settings.quiet:
                    for pr in pulls:
                        lines.append(f"{indent * 2}{pr.number}: {pr.title}")
                        if settings.show_link:
                            lines.append(f"{indent * 3}{pr.url}")
                elif settings.show_link:
                    lines.extend(f"{indent * 2}{pr.url}" for pr in pulls)

        if not settings.quiet:
            without_prs = [a for a in settings.authors if a not in self.by_author_repo]
            if without_prs:
                verb = "has" if len(without_prs) == 1 else "have"
                lines.append(f"NOTE: {', '.join(without_prs)} {verb} no open prs")

        return "\n".join(lines)
