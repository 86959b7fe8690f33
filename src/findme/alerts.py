"""User-facing alerts."""

from typing import Protocol

from rich.console import Console
from rich.panel import Panel
from structlog import get_logger

logger = get_logger()


class AlertSink(Protocol):
    """Something that can show a modal message to the user."""

    def alert(self, message: str) -> None: ...


class AlertLog:
    """Records alerts in the order they were raised."""

    def __init__(self):
        self.messages: list[str] = []

    def alert(self, message: str) -> None:
        logger.warning("Alert raised", message=message)
        self.messages.append(message)


class ConsoleAlerts:
    """Shows each alert as a red panel on the console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def alert(self, message: str) -> None:
        logger.warning("Alert raised", message=message)
        self.console.print(Panel(message, title="Alert", border_style="red"))
