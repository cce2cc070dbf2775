"""Persisted user settings and sync status models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from epitech_sync.models.event import CanonicalEvent


class AutoSyncFrequency(str, Enum):
    """How often an automatic sync may run."""

    EVERY_VISIT = "every_visit"
    ONCE_DAILY = "once_daily"
    MANUAL = "manual"


class SyncPeriod(BaseModel):
    """Date window fetched from the intranet.

    Boundaries are ``"today"``, a relative offset (``"+12months"``) or an
    ISO date.
    """

    start: str = "today"
    end: str = "+12months"


class AutoSyncSettings(BaseModel):
    """Automatic sync configuration."""

    enabled: bool = False
    frequency: AutoSyncFrequency = AutoSyncFrequency.ONCE_DAILY


class RemoteCalendarSettings(BaseModel):
    """Per-service remote calendar settings."""

    enabled: bool = False
    connected: bool = False
    calendar_id: str | None = None
    calendar_name: str = "Epitech"

    @property
    def is_active(self) -> bool:
        """True when the service should take part in a sync."""
        return self.enabled and self.connected and bool(self.calendar_id)


class IcsExportSettings(BaseModel):
    """ICS export settings."""

    enabled: bool = True


class SyncSettings(BaseModel):
    """User settings stored in the key-value store.

    Missing keys in a stored blob fall back to these defaults, including
    inside nested sections.
    """

    event_prefix: str = "EPITECH - "
    sync_period: SyncPeriod = Field(default_factory=SyncPeriod)
    auto_sync: AutoSyncSettings = Field(default_factory=AutoSyncSettings)
    notifications_enabled: bool = True
    google: RemoteCalendarSettings = Field(default_factory=RemoteCalendarSettings)
    outlook: RemoteCalendarSettings = Field(default_factory=RemoteCalendarSettings)
    ics_export: IcsExportSettings = Field(default_factory=IcsExportSettings)
    last_sync_timestamp: datetime | None = None
    last_sync_date: str | None = None


class SyncStatus(BaseModel):
    """Status snapshot polled by status displays."""

    is_connected: bool = False
    is_syncing: bool = False
    last_sync: datetime | None = None
    last_error: str | None = None


class StatusResponse(BaseModel):
    """Status snapshot combined with live authentication and settings."""

    is_connected: bool
    is_syncing: bool
    last_sync: datetime | None = None
    last_error: str | None = None
    settings: SyncSettings


class IcsExport(BaseModel):
    """Exported calendar document and its suggested filename."""

    content: str
    filename: str


class CachedEvents(BaseModel):
    """Wrapper used to (de)serialize the cached canonical events."""

    events: list[CanonicalEvent] = Field(default_factory=list)
