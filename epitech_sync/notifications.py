"""Fire-and-forget user notifications."""

import logging
from typing import Protocol

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Protocol for notification sinks."""

    async def notify(self, title: str, message: str) -> None:
        """Show a notification to the user."""
        ...


class ConsoleNotifier:
    """Print notifications to a Rich console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    async def notify(self, title: str, message: str) -> None:
        logger.info(f"Notification: {title}: {message}")
        self.console.print(f"[bold]{escape(title)}[/bold]")
        self.console.print(f"  {escape(message)}")


class NullNotifier:
    """Discard notifications."""

    async def notify(self, title: str, message: str) -> None:
        logger.debug(f"Notification suppressed: {title}: {message}")


async def safe_notify(notifier: Notifier, title: str, message: str) -> None:
    """Send a notification; failures are logged and never propagate."""
    try:
        await notifier.notify(title, message)
    except Exception as e:
        logger.warning(f"Notification failed: {e}")
