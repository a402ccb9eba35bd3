"""Notifier implementations for CLI and headless use."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """Prints notices to the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def notify(self, message: str) -> None:
        style = "red" if message.startswith("Error") else "cyan"
        self.console.print(f"[{style}]{escape(message)}[/{style}]", highlight=False)


class LogNotifier:
    """Routes notices to the log, for watch mode and embedding."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def notify(self, message: str) -> None:
        logger.log(self.level, message)
