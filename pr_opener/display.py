"""Rich terminal output for settings, progress and found pull requests."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from .config import Settings
from .selection import LITERALS, SelectionResolver
from .store import PRStore

console = Console()


def _bullets(items: list[str], indent: str) -> str:
    return "\n".join(f"{indent}* {item}" for item in items)


def print_settings(settings: Settings, out: Optional[Console] = None):
    """Describe the run before it starts. Only shown in verbose mode."""
    out = out or console
    if not settings.verbose:
        return

    indent = settings.indent
    out.print(settings.separator, markup=False)
    if settings.uses_token:
        out.print(f"Using Auth: Token '{'*' * len(settings.auth_token)}'", markup=False)
    else:
        masked = "*" * len(settings.password or "")
        out.print(f"Using Auth: username/password '{settings.username}'/'{masked}'", markup=False)

    if settings.auto_open:
        out.print("Automatically opening PRs made by;")
    else:
        out.print("Finding open PRs made by;")
    out.print(_bullets(settings.authors, indent), markup=False)
    out.print(f"In the organization '{settings.org}' to the following repos;", markup=False)
    out.print(_bullets(settings.repos, indent), markup=False)

    out.print("Formatting;")
    if settings.show_link:
        out.print(f"{indent}Printing links for each PR.", markup=False)
    else:
        out.print(f"{indent}Not printing links for each PR.", markup=False)
    out.print(f"{indent}And using an indent of '{indent}'.", markup=False)
    out.print(settings.separator, markup=False)


def progress(message: str, out: Optional[Console] = None):
    """Write ``message`` over the current line. An empty message clears it."""
    out = out or console
    width = max(out.width - len(message), 0)
    out.file.write(f"\r{message}{' ' * width}")
    out.file.flush()


def repo_progress(org: str, repo: str, index: int, total: int):
    progress(f"Getting PRs for '{org}/{repo}' ({index}/{total})")


def print_summary(store: PRStore, settings: Settings, out: Optional[Console] = None):
    out = out or console
    summary = store.render_summary(settings)
    if summary:
        out.print(summary, markup=False, highlight=False)
    out.print(settings.separator, markup=False)


def print_vocabulary(resolver: SelectionResolver, settings: Settings, out: Optional[Console] = None):
    out = out or console
    indent = settings.indent
    out.print("You can specify PRs to open by;")
    out.print(f"{indent}[bold]Author:[/bold] {escape(', '.join(resolver.valid_authors))}")
    out.print(f"{indent}[bold]PR #:[/bold] {escape(', '.join(resolver.valid_numbers))}")
    out.print(f"{indent}[bold]Misc:[/bold] {', '.join(LITERALS)}")
