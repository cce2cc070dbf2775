"""Run a sync only if the auto-sync settings call for one."""

import logging
import sys

from epitech_sync_cli.context import get_context
from epitech_sync_cli.display import SyncRenderer, console

logger = logging.getLogger(__name__)


def auto_command() -> None:
    """Sync if auto sync is enabled and due (suitable for cron)."""
    ctx = get_context()
    result = ctx.run(lambda c: c.manager.check_and_sync())

    if result is None:
        if not ctx.quiet:
            console.print("Auto sync not needed.")
        return

    if not ctx.quiet:
        SyncRenderer().render_result(result)
    if not result.success:
        sys.exit(1)
