"""Export the planning as an ICS file."""

import logging
import sys
from datetime import date, datetime, time
from pathlib import Path

import typer
from typing_extensions import Annotated

from epitech_sync.constants import PARIS_TZ
from epitech_sync.exceptions import ExportError, SyncError
from epitech_sync_cli.context import get_context

logger = logging.getLogger(__name__)


def _parse_day(value: str, option: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Invalid date '{value}'. Use YYYY-MM-DD", param_hint=option)


def export_command(
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file (default: epitech-calendar-<date>.ics)"),
    ] = None,
    from_date: Annotated[
        str | None,
        typer.Option("--from", help="Only export events starting on or after this date (YYYY-MM-DD)"),
    ] = None,
    to_date: Annotated[
        str | None,
        typer.Option("--to", help="Only export events starting on or before this date (YYYY-MM-DD)"),
    ] = None,
) -> None:
    """
    Export events as an ICS file.

    Uses the events cached by the last sync; fetches them from the intranet
    when nothing is cached. Pass both --from and --to to export a date range.
    """
    if (from_date is None) != (to_date is None):
        raise typer.BadParameter("--from and --to must be given together")

    start = end = None
    if from_date is not None and to_date is not None:
        start = datetime.combine(_parse_day(from_date, "--from"), time.min, PARIS_TZ)
        end = datetime.combine(_parse_day(to_date, "--to"), time.max, PARIS_TZ)
        if start > end:
            raise typer.BadParameter("--from must not be after --to")

    ctx = get_context()
    try:
        export = ctx.run(lambda c: c.manager.export_ics(start, end))
    except ExportError as e:
        logger.error(f"Export failed: {e}")
        sys.exit(1)
    except SyncError as e:
        logger.error(str(e))
        sys.exit(1)

    path = output or Path(export.filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(export.content.encode("utf-8"))
    logger.info(f"Exported ICS calendar to {path}")

    if not ctx.quiet:
        print(f"{typer.style('✓', fg=typer.colors.GREEN, bold=True)} Exported ICS")
        print(f"  {path.resolve()}")
