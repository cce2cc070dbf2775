"""CLI commands package."""

from epitech_sync_cli.commands.auto import auto_command
from epitech_sync_cli.commands.connect import connect_command, disconnect_command
from epitech_sync_cli.commands.export import export_command
from epitech_sync_cli.commands.settings import settings_command
from epitech_sync_cli.commands.status import status_command
from epitech_sync_cli.commands.sync import sync_command

__all__ = [
    "auto_command",
    "connect_command",
    "disconnect_command",
    "export_command",
    "settings_command",
    "status_command",
    "sync_command",
]
