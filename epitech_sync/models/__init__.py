"""Pydantic models for Epitech calendar sync."""

from epitech_sync.models.event import ActivityRef, CanonicalEvent, ModuleRef
from epitech_sync.models.raw import (
    Instructor,
    RawEvent,
    RegistrationStatus,
    Room,
    SlotKind,
    SlotReservation,
)
from epitech_sync.models.result import (
    EventSyncDetail,
    ReconcileResult,
    SyncAction,
    SyncResult,
)
from epitech_sync.models.settings import (
    AutoSyncFrequency,
    AutoSyncSettings,
    CachedEvents,
    IcsExport,
    IcsExportSettings,
    RemoteCalendarSettings,
    StatusResponse,
    SyncPeriod,
    SyncSettings,
    SyncStatus,
)

__all__ = [
    "ActivityRef",
    "AutoSyncFrequency",
    "AutoSyncSettings",
    "CachedEvents",
    "CanonicalEvent",
    "EventSyncDetail",
    "IcsExport",
    "IcsExportSettings",
    "Instructor",
    "ModuleRef",
    "RawEvent",
    "ReconcileResult",
    "RegistrationStatus",
    "RemoteCalendarSettings",
    "Room",
    "SlotKind",
    "SlotReservation",
    "StatusResponse",
    "SyncAction",
    "SyncPeriod",
    "SyncResult",
    "SyncSettings",
    "SyncStatus",
]
