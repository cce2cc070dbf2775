"""Sync manager: orchestrates synchronization with remote calendars."""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Mapping

from epitech_sync.constants import (
    ICS_FILENAME_PATTERN,
    INTRA_BASE_URL,
    PARIS_TZ,
    SYNC_IN_PROGRESS_MESSAGE,
)
from epitech_sync.dates import resolve_sync_period, today
from epitech_sync.exceptions import CalendarNotConnectedError, NotAuthenticatedError
from epitech_sync.models.event import CanonicalEvent
from epitech_sync.models.result import SyncResult
from epitech_sync.models.settings import IcsExport, StatusResponse, SyncSettings
from epitech_sync.notifications import Notifier, NullNotifier, safe_notify
from epitech_sync.output.ics_writer import ICSWriter, filter_by_range
from epitech_sync.processing.normalizer import normalize_all
from epitech_sync.processing.reconciler import Reconciler
from epitech_sync.remote.base import RemoteCalendarAdapter
from epitech_sync.source.intranet import EventSource
from epitech_sync.storage.sync_storage import REMOTE_SERVICES, SyncStorage

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED_SYNC_MESSAGE = (
    "Not authenticated to Epitech intranet. Please visit intra.epitech.eu and log in."
)


class SyncState(str, Enum):
    """Orchestrator state within one process."""

    IDLE = "idle"
    SYNCING = "syncing"


def _now() -> datetime:
    return datetime.now(PARIS_TZ)


class SyncManager:
    """Single entry point for syncing, exporting and reporting status.

    At most one sync runs per instance: a request arriving while syncing is
    answered immediately with an "already in progress" result. Every failure
    below this class is converted into the returned ``SyncResult``.
    """

    def __init__(
        self,
        source: EventSource,
        storage: SyncStorage,
        adapters: Mapping[str, RemoteCalendarAdapter] | None = None,
        notifier: Notifier | None = None,
        writer: ICSWriter | None = None,
        clock: Callable[[], datetime] = _now,
        intra_base_url: str = INTRA_BASE_URL,
    ):
        """Initialize with collaborators (dependency injection).

        Args:
            source: Authoritative event feed
            storage: Settings, status and event cache
            adapters: Remote calendar adapters keyed by service (``google``,
                ``outlook``)
            notifier: User notification sink
            writer: ICS writer used for exports
            clock: Returns the current aware datetime
            intra_base_url: Base URL used for links in event descriptions
        """
        self.source = source
        self.storage = storage
        self.adapters = dict(adapters or {})
        self.notifier = notifier or NullNotifier()
        self.writer = writer or ICSWriter()
        self.clock = clock
        self.intra_base_url = intra_base_url
        self._state = SyncState.IDLE

    @property
    def state(self) -> SyncState:
        return self._state

    def is_sync_in_progress(self) -> bool:
        return self._state is SyncState.SYNCING

    async def fetch_events(
        self, settings: SyncSettings, errors: list[str] | None = None
    ) -> list[CanonicalEvent]:
        """Fetch and normalize the events of the configured sync period.

        Records that fail to normalize are skipped and reported in ``errors``.
        """
        start, end = resolve_sync_period(
            settings.sync_period.start, settings.sync_period.end, today(self.clock())
        )
        records = await self.source.fetch_planning(start, end)
        return normalize_all(records, settings.event_prefix, self.intra_base_url, errors)

    async def perform_sync(self, manual: bool = False) -> SyncResult:
        """Run one full sync pass.

        Args:
            manual: True when triggered by the user (enables the summary
                notification)

        Returns:
            SyncResult; never raises
        """
        if self._state is SyncState.SYNCING:
            logger.info("Sync requested while another sync is running")
            return SyncResult(
                success=False,
                timestamp=self.clock(),
                errors=[SYNC_IN_PROGRESS_MESSAGE],
            )

        # Claimed before the first await so concurrent callers see it
        self._state = SyncState.SYNCING
        result = SyncResult(timestamp=self.clock())
        settings: SyncSettings | None = None

        try:
            await self.storage.update_sync_status(is_syncing=True, last_error=None)

            auth = await self.source.check_authentication()
            await self.storage.update_sync_status(is_connected=auth.authenticated)
            if not auth.authenticated:
                raise NotAuthenticatedError(NOT_AUTHENTICATED_SYNC_MESSAGE)

            settings = await self.storage.get_settings()

            logger.info("Fetching events from the intranet...")
            events = await self.fetch_events(settings, result.errors)
            result.events_processed = len(events)
            logger.info(f"Fetched {len(events)} events")

            await self.storage.cache_events(events)

            for service in REMOTE_SERVICES:
                await self._sync_service(service, settings, events, result)

            await self.storage.mark_sync_completed(self.clock())
            result.success = not result.errors
            if result.errors:
                await self.storage.update_sync_status(last_error=result.errors[-1])

            if settings.notifications_enabled and manual:
                await self._notify_result(result)

        except Exception as e:
            error_msg = str(e) or type(e).__name__
            logger.error(f"Sync failed: {error_msg}")
            result.success = False
            result.errors.append(error_msg)
            await self._record_failure(error_msg, settings)

        finally:
            self._state = SyncState.IDLE
            try:
                await self.storage.update_sync_status(is_syncing=False)
            except Exception as e:
                logger.error(f"Failed to persist sync status: {e}")

        return result

    async def _sync_service(
        self,
        service: str,
        settings: SyncSettings,
        events: list[CanonicalEvent],
        result: SyncResult,
    ) -> None:
        remote_settings = getattr(settings, service)
        adapter = self.adapters.get(service)
        if adapter is None or not remote_settings.is_active:
            return

        logger.info(f"Syncing to {adapter.name} Calendar...")
        try:
            service_result = await Reconciler(adapter).reconcile(
                remote_settings.calendar_id, events
            )
        except Exception as e:
            error_msg = str(e) or type(e).__name__
            logger.error(f"{adapter.name} Calendar sync failed: {error_msg}")
            result.errors.append(f"{adapter.name} Calendar sync failed: {error_msg}")
            return

        result.absorb(adapter.name, service_result)

    async def _record_failure(self, error_msg: str, settings: SyncSettings | None) -> None:
        try:
            await self.storage.update_sync_status(last_error=error_msg)
            if settings is None:
                settings = await self.storage.get_settings()
        except Exception as e:
            logger.error(f"Failed to persist sync error: {e}")
            return

        if settings.notifications_enabled:
            await safe_notify(self.notifier, "Epitech Calendar Sync - Error", error_msg)

    async def _notify_result(self, result: SyncResult) -> None:
        if result.success:
            title = "Epitech Calendar Sync - Success"
            message = (
                f"Synced {result.events_processed} events. "
                f"Created: {result.events_created}, Updated: {result.events_updated}, "
                f"Deleted: {result.events_deleted}"
            )
        else:
            title = "Epitech Calendar Sync - Completed with errors"
            message = f"Synced with {len(result.errors)} error(s). {result.errors[0]}"
        await safe_notify(self.notifier, title, message)

    async def export_ics(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> IcsExport:
        """Export events as an ICS document.

        Uses the cached events, fetching fresh ones only when the cache is
        empty. When both ``start`` and ``end`` are given, only events starting
        in that range are exported.

        Raises:
            NotAuthenticatedError: If the cache is empty and the session is invalid
            ExportError: If an event cannot be encoded
        """
        events = await self.storage.get_cached_events()

        if not events:
            auth = await self.source.check_authentication()
            if not auth.authenticated:
                raise NotAuthenticatedError("Not authenticated to Epitech intranet")
            settings = await self.storage.get_settings()
            events = await self.fetch_events(settings)
            await self.storage.cache_events(events)

        if start is not None and end is not None:
            events = filter_by_range(events, start, end)

        now = self.clock()
        content = self.writer.encode(events, stamp=now)
        filename = ICS_FILENAME_PATTERN.format(date=today(now).isoformat())
        return IcsExport(content=content, filename=filename)

    async def check_and_sync(self) -> SyncResult | None:
        """Run an automatic sync if the configured frequency allows it."""
        if await self.storage.should_auto_sync(self.clock()):
            logger.info("Auto sync triggered")
            return await self.perform_sync(manual=False)

        logger.info("Auto sync skipped (not needed or disabled)")
        return None

    async def get_status(self) -> StatusResponse:
        status = await self.storage.get_sync_status()
        settings = await self.storage.get_settings()
        auth = await self.source.check_authentication()
        return StatusResponse(
            is_connected=auth.authenticated,
            is_syncing=self.is_sync_in_progress(),
            last_sync=settings.last_sync_timestamp,
            last_error=status.last_error,
            settings=settings,
        )

    def _adapter(self, service: str) -> RemoteCalendarAdapter:
        adapter = self.adapters.get(service)
        if adapter is None:
            raise CalendarNotConnectedError(f"No adapter configured for {service}")
        return adapter

    async def connect(self, service: str) -> str:
        """Find or create the mirror calendar and mark the service connected.

        Returns:
            The remote calendar id
        """
        adapter = self._adapter(service)
        settings = await self.storage.get_settings()
        calendar_name = getattr(settings, service).calendar_name
        calendar_id = await adapter.find_or_create_calendar(calendar_name)
        await self.storage.update_remote_settings(
            service, connected=True, enabled=True, calendar_id=calendar_id
        )
        logger.info(f"Connected {adapter.name} calendar '{calendar_name}' ({calendar_id})")
        return calendar_id

    async def disconnect(self, service: str) -> None:
        """Forget the remote calendar of ``service``."""
        await self.storage.update_remote_settings(
            service, connected=False, calendar_id=None
        )
        logger.info(f"Disconnected {service}")
