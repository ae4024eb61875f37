"""Interfaces that present the found pull requests and open the chosen ones."""

from __future__ import annotations

import logging
from typing import Callable

try:
    import readline
except ImportError:
    readline = None

from rich.console import Console
from rich.markup import escape

from . import display
from .browser import Browser
from .config import Settings
from .selection import ALL, Selection, SelectionResolver, complete
from .store import PRStore

logger = logging.getLogger(__name__)

PROMPT = "> "
COMPLETER_DELIMS = " \t\n"


class NullInterface:
    """Used when no known interface is configured."""

    def __init__(self, settings: Settings, console: Console | None = None):
        self.settings = settings
        self.console = console or display.console

    def display(self, store: PRStore) -> list[str]:
        if not self.settings.quiet:
            self.console.print("No output to display.")
        return []


class TerminalInterface:
    """Prompts for a selection command and opens what it resolves to."""

    def __init__(
        self,
        settings: Settings,
        browser: Browser | None = None,
        reader: Callable[[str], str] = input,
        console: Console | None = None,
    ):
        self.settings = settings
        self.console = console or display.console
        self.browser = browser or Browser(console=self.console)
        self.reader = reader

    def display(self, store: PRStore) -> list[str]:
        """Open the selected pull requests. Returns the URLs that were selected."""
        resolver = SelectionResolver(store, self.settings.authors)

        if self.settings.auto_open:
            self.console.print("Automatically opening links for all found PRs.")
            urls = resolver.expand({ALL})
        else:
            selection = self.prompt(resolver)
            urls = selection.urls if selection else []

        for url in urls:
            self.browser.open(url)

        if not self.settings.quiet:
            self.console.print(self.settings.separator, markup=False)
            self.console.print()
        return urls

    def prompt(self, resolver: SelectionResolver) -> Selection | None:
        """Ask until a valid command is entered. ``None`` on EOF or Ctrl-C."""
        vocabulary = resolver.vocabulary()
        self._install_completer(vocabulary)
        if not self.settings.quiet:
            display.print_vocabulary(resolver, self.settings, self.console)

        while True:
            try:
                line = self.reader(PROMPT)
            except (EOFError, KeyboardInterrupt):
                self.console.print("\n[dim]Nothing opened.[/dim]")
                return None

            selection = resolver.resolve(line.strip())
            if selection.accepted:
                logger.debug("Accepted selection %s", sorted(selection.tokens))
                return selection

            self._report_invalid(selection)
            if not self.settings.quiet:
                display.print_vocabulary(resolver, self.settings, self.console)

    def _report_invalid(self, selection: Selection):
        if not selection.tokens:
            self.console.print("[red]No command specified.[/red]")
        elif len(selection.tokens) == 1:
            self.console.print(f"[red]Unknown command[/red] {escape(selection.invalid[0])} specified.")
        else:
            unknown = ", ".join(selection.invalid)
            self.console.print(f"[red]Specified unknown commands:[/red] {escape(unknown)}.")

    @staticmethod
    def _install_completer(vocabulary: set[str]):
        if readline is None:
            return

        def completer(text: str, state: int) -> str | None:
            matches = complete(text, vocabulary)
            return matches[state] if state < len(matches) else None

        readline.set_completer(completer)
        # "repo:number" keys and hyphenated names complete as one word
        readline.set_completer_delims(COMPLETER_DELIMS)
        readline.parse_and_bind("tab: complete")


def build_interface(settings: Settings, **kwargs) -> TerminalInterface | NullInterface:
    if settings.interface == "terminal":
        return TerminalInterface(settings, **kwargs)
    logger.info("Unknown interface %r, nothing will be displayed", settings.interface)
    return NullInterface(settings, console=kwargs.get("console"))
