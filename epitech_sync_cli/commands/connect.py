"""Connect or disconnect a remote calendar service."""

import logging
import sys
from enum import Enum

import typer
from typing_extensions import Annotated

from epitech_sync.exceptions import RemoteCalendarError
from epitech_sync_cli.context import get_context

logger = logging.getLogger(__name__)


class Service(str, Enum):
    google = "google"
    outlook = "outlook"


def connect_command(
    service: Annotated[Service, typer.Argument(help="Remote calendar service")],
) -> None:
    """
    Connect a remote calendar.

    Finds the mirror calendar by name (creating it if needed) using the
    access token from the environment, then enables syncing to it.
    """
    ctx = get_context()
    try:
        calendar_id = ctx.run(lambda c: c.manager.connect(service.value))
    except RemoteCalendarError as e:
        logger.error(f"Could not connect {service.value}: {e}")
        sys.exit(1)

    print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} Connected {service.value}")
    print(f"  Calendar: {calendar_id}")


def disconnect_command(
    service: Annotated[Service, typer.Argument(help="Remote calendar service")],
) -> None:
    """Disconnect a remote calendar. Remote events are left in place."""
    ctx = get_context()
    ctx.run(lambda c: c.manager.disconnect(service.value))
    print(f"Disconnected {service.value}")
