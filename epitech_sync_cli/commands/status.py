"""Show intranet connection, last sync and remote calendar state."""

from epitech_sync_cli.context import get_context
from epitech_sync_cli.display import SyncRenderer


def status_command() -> None:
    """Show sync status."""
    ctx = get_context()
    status = ctx.run(lambda c: c.manager.get_status())
    SyncRenderer().render_status(status)
