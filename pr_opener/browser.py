"""Opens pull request URLs in the default browser, each at most once."""

from __future__ import annotations

import logging
import time
import webbrowser
from typing import Callable

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)

# webbrowser drops tabs when several opens are issued back to back
OPEN_DELAY_SECONDS = 0.1


class Browser:
    def __init__(
        self,
        opener: Callable[[str], bool] = webbrowser.open,
        delay: float = OPEN_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        console: Console | None = None,
    ):
        self.opener = opener
        self.delay = delay
        self.sleep = sleep
        self.console = console or Console()
        self.opened: set[str] = set()

    def open(self, url: str) -> bool:
        """Open ``url`` unless it was already opened. Returns True if dispatched."""
        if url in self.opened:
            logger.info("filtered %s", url)
            self.console.print(f"[dim]filtered {escape(url)}[/dim]")
            return False

        self.opened.add(url)
        self.sleep(self.delay)
        try:
            ok = self.opener(url)
        except Exception as e:
            logger.debug("Opening %s failed: %s", url, e)
            self.console.print(f"[red]Attempted to open {escape(url)} and failed because {escape(str(e))}[/red]")
            return True

        if ok is False:
            logger.debug("No browser accepted %s", url)
            self.console.print(f"[red]Attempted to open {escape(url)} and failed because no browser is available[/red]")
        return True
