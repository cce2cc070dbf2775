"""Renderers for sync results, status and settings."""

from rich.markup import escape
from rich.table import Table

from epitech_sync.models.result import SyncResult
from epitech_sync.models.settings import StatusResponse, SyncSettings
from epitech_sync_cli.display.console import console


def _format_time(value) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else "never"


class SyncRenderer:
    """Render sync results, status snapshots and settings."""

    def render_result(self, result: SyncResult) -> None:
        """Render counts and errors of a sync run."""
        mark = "[green]✓[/green]" if result.success else "[red]✗[/red]"
        headline = "Sync complete" if result.success else "Sync finished with errors"
        console.print(f"\n{mark} [bold]{headline}[/bold]")

        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_row("Processed", str(result.events_processed))
        table.add_row("Created", str(result.events_created))
        table.add_row("Updated", str(result.events_updated))
        table.add_row("Deleted", str(result.events_deleted))
        console.print(table)

        if result.errors:
            console.print(f"\n[red]Errors ({len(result.errors)}):[/red]")
            for error in result.errors:
                console.print(f"  - {escape(error)}")

    def render_status(self, status: StatusResponse) -> None:
        """Render the status snapshot."""
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_row(
            "Intranet",
            "[green]connected[/green]" if status.is_connected else "[red]not logged in[/red]",
        )
        table.add_row("Syncing", "yes" if status.is_syncing else "no")
        table.add_row("Last sync", _format_time(status.last_sync))
        table.add_row("Last error", escape(status.last_error or "-"))
        for label, remote in (
            ("Google", status.settings.google),
            ("Outlook", status.settings.outlook),
        ):
            state = "connected" if remote.connected else "disconnected"
            if remote.connected and not remote.enabled:
                state += " (disabled)"
            table.add_row(label, f"{state} · {escape(remote.calendar_name)}")
        console.print(table)

    def render_settings(self, settings: SyncSettings) -> None:
        """Render user settings."""
        table = Table(title="Settings", show_header=True, header_style="bold")
        table.add_column("Setting")
        table.add_column("Value")
        table.add_row("Event prefix", escape(repr(settings.event_prefix)))
        table.add_row(
            "Sync period", f"{settings.sync_period.start} → {settings.sync_period.end}"
        )
        table.add_row(
            "Auto sync",
            f"{'on' if settings.auto_sync.enabled else 'off'} ({settings.auto_sync.frequency.value})",
        )
        table.add_row("Notifications", "on" if settings.notifications_enabled else "off")
        table.add_row("Google calendar", settings.google.calendar_id or "-")
        table.add_row("Outlook calendar", settings.outlook.calendar_id or "-")
        console.print(table)
