"""Show or update sync settings."""

import logging
import sys
from typing import Any

import typer
from typing_extensions import Annotated

from epitech_sync.exceptions import StorageError
from epitech_sync.models.settings import AutoSyncFrequency
from epitech_sync_cli.context import get_context
from epitech_sync_cli.display import SyncRenderer

logger = logging.getLogger(__name__)


def settings_command(
    prefix: Annotated[
        str | None,
        typer.Option("--prefix", help="Title prefix for synced events"),
    ] = None,
    period_start: Annotated[
        str | None,
        typer.Option("--period-start", help="Sync period start (today, +Nunit or YYYY-MM-DD)"),
    ] = None,
    period_end: Annotated[
        str | None,
        typer.Option("--period-end", help="Sync period end (today, +Nunit or YYYY-MM-DD)"),
    ] = None,
    auto_sync: Annotated[
        bool | None,
        typer.Option("--auto-sync/--no-auto-sync", help="Enable or disable automatic sync"),
    ] = None,
    frequency: Annotated[
        AutoSyncFrequency | None,
        typer.Option("--frequency", help="Automatic sync frequency"),
    ] = None,
    notifications: Annotated[
        bool | None,
        typer.Option("--notifications/--no-notifications", help="Enable or disable notifications"),
    ] = None,
    google: Annotated[
        bool | None,
        typer.Option("--google/--no-google", help="Enable or disable Google Calendar sync"),
    ] = None,
    outlook: Annotated[
        bool | None,
        typer.Option("--outlook/--no-outlook", help="Enable or disable Outlook sync"),
    ] = None,
) -> None:
    """Show settings, or update the given ones."""
    updates: dict[str, Any] = {}
    if prefix is not None:
        updates["event_prefix"] = prefix
    if period_start is not None:
        updates.setdefault("sync_period", {})["start"] = period_start
    if period_end is not None:
        updates.setdefault("sync_period", {})["end"] = period_end
    if auto_sync is not None:
        updates.setdefault("auto_sync", {})["enabled"] = auto_sync
    if frequency is not None:
        updates.setdefault("auto_sync", {})["frequency"] = frequency.value
    if notifications is not None:
        updates["notifications_enabled"] = notifications
    if google is not None:
        updates["google"] = {"enabled": google}
    if outlook is not None:
        updates["outlook"] = {"enabled": outlook}

    ctx = get_context()

    async def apply(c):
        if updates:
            return await c.storage.save_settings(updates)
        return await c.storage.get_settings()

    try:
        settings = ctx.run(apply)
    except StorageError as e:
        logger.error(str(e))
        sys.exit(1)

    if updates:
        logger.info(f"Updated settings: {', '.join(sorted(updates))}")
    SyncRenderer().render_settings(settings)
