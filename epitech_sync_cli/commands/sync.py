"""Run a manual sync of the intranet planning to the connected calendars."""

import logging
import sys

from epitech_sync_cli.context import get_context
from epitech_sync_cli.display import SyncRenderer

logger = logging.getLogger(__name__)


def sync_command() -> None:
    """Fetch the intranet planning and mirror it to connected calendars."""
    ctx = get_context()
    result = ctx.run(lambda c: c.manager.perform_sync(manual=True))

    if not ctx.quiet:
        SyncRenderer().render_result(result)

    if not result.success:
        logger.error("Sync did not complete successfully")
        sys.exit(1)
