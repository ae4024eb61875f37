from __future__ import annotations

import argparse
import logging
import sys

from rich.logging import RichHandler
from rich.markup import escape

from . import display
from .config import ConfigError, load_settings
from .finder import credentials_message, find_prs
from .github_api import GitHubAPIError, GitHubClient, InvalidCredentialsError
from .interactive import build_interface

logger = logging.getLogger(__name__)


def _parse_list(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pr-opener",
        description=(
            "Find open pull requests by a set of authors across an organization's"
            " repositories and open the ones you pick in a browser."
        ),
    )
    parser.add_argument("command", nargs="?", help=argparse.SUPPRESS)
    parser.add_argument("-c", "--config", help="The yaml config file to load.")
    parser.add_argument(
        "-q", "--quiet", action="store_true", default=None,
        help="Only print prompts for required input and fatal errors.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=None,
        help="Show all the configured options on launch. Also turns quiet mode off.",
    )
    parser.add_argument(
        "-b", "--auto-open", action="store_true", default=None,
        help="Open every PR found in the default browser without prompting.",
    )
    parser.add_argument(
        "-l", "--show-link", action="store_true", default=None,
        help="Add links to each PR in the status printout.",
    )
    parser.add_argument("-I", "--interface", default=None, help="Interface to use (terminal).")
    parser.add_argument("-i", "--indent", default=None, help="String used to indent lines.")
    parser.add_argument("-o", "--org", default=None, help="Organization to search in.")
    parser.add_argument(
        "-r", "--repos", default=None,
        help=(
            "Comma-separated repositories to search. 'all' fetches every repo in the"
            " organization, which costs one extra request per repository."
        ),
    )
    parser.add_argument("-a", "--authors", default=None, help="Comma-separated authors to search for.")
    parser.add_argument("-u", "--username", default=None, help="Username to authenticate with.")
    parser.add_argument("-p", "--password", default=None, help="Password to authenticate with.")
    parser.add_argument("-t", "--auth-token", default=None, help="Auth token to authenticate with.")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for diagnostic output.",
    )
    return parser


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=display.console, show_path=False)],
    )


def _options(args: argparse.Namespace) -> dict:
    return {
        "quiet": args.quiet,
        "verbose": args.verbose,
        "auto_open": args.auto_open,
        "show_link": args.show_link,
        "interface": args.interface,
        "indent": args.indent,
        "org": args.org,
        "repos": _parse_list(args.repos),
        "authors": _parse_list(args.authors),
        "username": args.username,
        "password": args.password,
        "auth_token": args.auth_token,
    }


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = display.console

    if args.command == "help":
        parser.print_help()
        return 0
    if args.command is not None:
        parser.error(f"unrecognized command '{args.command}'")
    if not args.config:
        console.print("[red]No config file specified. You must specify a yaml config file.[/red]")
        parser.print_help()
        return 2

    setup_logging(args.log_level)

    try:
        settings = load_settings(args.config, _options(args))
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return 2
    if not settings.quiet:
        console.print(f"Using config file at '{args.config}'", markup=False)

    client = GitHubClient(
        token=settings.auth_token,
        username=settings.username,
        password=settings.password,
    )

    try:
        if settings.wants_all_repos:
            settings = settings.with_repos(client.list_org_repos(settings.org))
        display.print_settings(settings)
        store = find_prs(client, settings, on_progress=display.repo_progress, console=console)
    except InvalidCredentialsError:
        display.progress("")
        console.print(f"\n[red]{escape(credentials_message(settings))}[/red]")
        return 1
    except GitHubAPIError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    display.progress("")
    console.print()

    display.print_summary(store, settings)
    build_interface(settings, console=console).display(store)

    console.print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
