"""Typer application and command routing."""

import logging

import typer
from typing_extensions import Annotated

from epitech_sync_cli import setup_logging
from epitech_sync_cli.commands import (
    auto_command,
    connect_command,
    disconnect_command,
    export_command,
    settings_command,
    status_command,
    sync_command,
)
from epitech_sync_cli.context import CLIContext, set_context

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="epitech-sync",
    help="Sync the Epitech intranet planning to Google Calendar, Outlook and ICS files.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show info logs on the console"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only show errors"),
    ] = False,
) -> None:
    """Epitech calendar sync."""
    ctx = CLIContext(verbose=verbose, quiet=quiet)
    setup_logging(verbose=verbose, quiet=quiet, config=ctx.config)
    set_context(ctx)


app.command("sync")(sync_command)
app.command("auto")(auto_command)
app.command("export")(export_command)
app.command("status")(status_command)
app.command("connect")(connect_command)
app.command("disconnect")(disconnect_command)
app.command("settings")(settings_command)
