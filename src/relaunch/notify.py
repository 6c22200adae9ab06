"""User-visible notifications rendered on the console."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

from rich.console import Console
from rich.panel import Panel

logger = logging.getLogger(__name__)


class NotificationType(str, Enum):
    """Severity of a notification."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_STYLES = {
    NotificationType.INFO: "cyan",
    NotificationType.WARNING: "yellow",
    NotificationType.ERROR: "bold red",
}

_LOG_LEVELS = {
    NotificationType.INFO: logging.INFO,
    NotificationType.WARNING: logging.WARNING,
    NotificationType.ERROR: logging.ERROR,
}


class Notifier:
    """Shows launcher messages to the user."""

    def __init__(self, app_name: str, console: Console | None = None):
        self.app_name = app_name
        self.console = console or Console(stderr=True)

    def notify(self, message: str, kind: NotificationType = NotificationType.INFO) -> None:
        logger.log(_LOG_LEVELS[kind], message)
        self.console.print(
            Panel(message, title=self.app_name, border_style=_STYLES[kind], expand=False)
        )

    def info(self, message: str) -> None:
        self.notify(message, NotificationType.INFO)

    def warning(self, message: str) -> None:
        self.notify(message, NotificationType.WARNING)

    def error(self, message: str) -> None:
        self.notify(message, NotificationType.ERROR)

    @contextmanager
    def busy(self, message: str) -> Iterator[None]:
        """Show ``message`` with a spinner for the duration of the block."""
        logger.info(message)
        with self.console.status(f"[cyan]{message}[/cyan]"):
            yield
