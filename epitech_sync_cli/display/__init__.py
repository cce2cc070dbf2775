"""Display components for CLI output."""

from epitech_sync_cli.display.console import console
from epitech_sync_cli.display.sync_renderer import SyncRenderer

__all__ = [
    "SyncRenderer",
    "console",
]
