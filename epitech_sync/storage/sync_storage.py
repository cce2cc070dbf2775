"""Typed access to persisted settings, sync status and cached events."""

import logging
from datetime import datetime
from typing import Any, Sequence

from pydantic import ValidationError

from epitech_sync.constants import CACHED_EVENTS_KEY, SETTINGS_KEY, SYNC_STATUS_KEY
from epitech_sync.dates import today
from epitech_sync.exceptions import StorageError
from epitech_sync.models.event import CanonicalEvent
from epitech_sync.models.settings import (
    AutoSyncFrequency,
    CachedEvents,
    RemoteCalendarSettings,
    SyncSettings,
    SyncStatus,
)
from epitech_sync.storage.store import KeyValueStore

logger = logging.getLogger(__name__)

REMOTE_SERVICES = ("google", "outlook")


def _merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class SyncStorage:
    """Settings, status and event cache on top of a key-value store."""

    def __init__(self, store: KeyValueStore):
        """Initialize with store (dependency injection)."""
        self.store = store

    async def get_settings(self) -> SyncSettings:
        """Stored settings merged over defaults."""
        stored = await self.store.get(SETTINGS_KEY)
        if not stored:
            return SyncSettings()
        try:
            return SyncSettings.model_validate(stored)
        except ValidationError as e:
            raise StorageError(f"Stored settings are invalid: {e}") from e

    async def save_settings(self, updates: dict[str, Any]) -> SyncSettings:
        """Deep-merge ``updates`` into the stored settings."""
        current = (await self.get_settings()).model_dump(mode="json")
        try:
            settings = SyncSettings.model_validate(_merge(current, updates))
        except ValidationError as e:
            raise StorageError(f"Invalid settings update: {e}") from e
        await self.store.set(SETTINGS_KEY, settings.model_dump(mode="json"))
        return settings

    async def update_remote_settings(self, service: str, **changes: Any) -> RemoteCalendarSettings:
        """Update one remote service section (``google`` or ``outlook``)."""
        if service not in REMOTE_SERVICES:
            raise ValueError(f"Unknown remote service: {service}")
        settings = await self.save_settings({service: changes})
        return getattr(settings, service)

    async def get_sync_status(self) -> SyncStatus:
        stored = await self.store.get(SYNC_STATUS_KEY)
        if not stored:
            return SyncStatus()
        try:
            return SyncStatus.model_validate(stored)
        except ValidationError:
            logger.warning("Stored sync status is invalid, resetting")
            return SyncStatus()

    async def update_sync_status(self, **changes: Any) -> SyncStatus:
        current = await self.get_sync_status()
        status = current.model_copy(update=changes)
        await self.store.set(SYNC_STATUS_KEY, status.model_dump(mode="json"))
        return status

    async def cache_events(self, events: Sequence[CanonicalEvent]) -> None:
        """Cache events with instants as ISO-8601 strings."""
        cached = CachedEvents(events=list(events))
        await self.store.set(CACHED_EVENTS_KEY, cached.model_dump(mode="json")["events"])

    async def get_cached_events(self) -> list[CanonicalEvent] | None:
        stored = await self.store.get(CACHED_EVENTS_KEY)
        if stored is None:
            return None
        try:
            return CachedEvents.model_validate({"events": stored}).events
        except ValidationError as e:
            raise StorageError(f"Cached events are invalid: {e}") from e

    async def mark_sync_completed(self, now: datetime) -> None:
        """Record a successful sync and clear the last error."""
        await self.save_settings(
            {
                "last_sync_timestamp": now.isoformat(),
                "last_sync_date": today(now).isoformat(),
            }
        )
        await self.update_sync_status(last_sync=now, last_error=None)

    async def should_auto_sync(self, now: datetime) -> bool:
        """Whether the auto-sync frequency allows a run at ``now``."""
        settings = await self.get_settings()
        if not settings.auto_sync.enabled:
            return False

        frequency = settings.auto_sync.frequency
        if frequency is AutoSyncFrequency.EVERY_VISIT:
            return True
        if frequency is AutoSyncFrequency.ONCE_DAILY:
            return settings.last_sync_date != today(now).isoformat()
        return False

    async def clear_all(self) -> None:
        await self.store.clear()
