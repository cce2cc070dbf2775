"""Reconcile a remote calendar's tagged events with the canonical set."""

import logging
from typing import Sequence

from epitech_sync.models.event import CanonicalEvent
from epitech_sync.models.result import ReconcileResult, SyncAction
from epitech_sync.remote.base import RemoteCalendarAdapter, RemoteEvent

logger = logging.getLogger(__name__)


class Reconciler:
    """Drive one remote calendar adapter through a create/update/delete pass.

    Existing tagged events are always rewritten in full: the remote calendar
    is a mirror, never a source of truth. Each mutation is isolated, so one
    failing call is recorded and the rest of the batch still runs.
    """

    def __init__(self, adapter: RemoteCalendarAdapter):
        """Initialize with adapter (dependency injection)."""
        self.adapter = adapter

    async def reconcile(
        self, calendar_id: str, events: Sequence[CanonicalEvent]
    ) -> ReconcileResult:
        """Align ``calendar_id`` with ``events``.

        Args:
            calendar_id: Remote calendar handle
            events: Current canonical event set

        Returns:
            ReconcileResult with counts and per-event errors

        Raises:
            RemoteCalendarError: If existing events cannot be listed
        """
        result = ReconcileResult()

        # A listing failure aborts this service only; the caller reports it
        existing, duplicates = self._index(await self.adapter.list_tagged(calendar_id))
        processed: set[str] = set()

        for event in events:
            processed.add(event.id)
            remote = existing.get(event.id)
            action = SyncAction.UPDATED if remote is not None else SyncAction.CREATED

            try:
                if remote is not None:
                    await self.adapter.update(calendar_id, remote, event)
                else:
                    await self.adapter.create(calendar_id, event)
            except Exception as e:
                logger.warning(f"{self.adapter.name}: {action.value} {event.id} failed: {e}")
                result.record(event.id, action, str(e) or type(e).__name__)
            else:
                result.record(event.id, action)

        stale = [r for sid, r in existing.items() if sid not in processed]
        for remote in stale + duplicates:
            await self._delete(calendar_id, remote, result)

        logger.info(
            f"{self.adapter.name}: created={result.created} updated={result.updated} "
            f"deleted={result.deleted} errors={len(result.errors)}"
        )
        return result

    @staticmethod
    def _index(
        remotes: Sequence[RemoteEvent],
    ) -> tuple[dict[str, RemoteEvent], list[RemoteEvent]]:
        """Keep the first remote event per canonical id; the rest are extra copies."""
        existing: dict[str, RemoteEvent] = {}
        duplicates: list[RemoteEvent] = []
        for remote in remotes:
            if remote.source_id in existing:
                duplicates.append(remote)
            else:
                existing[remote.source_id] = remote
        if duplicates:
            logger.info(f"{len(duplicates)} duplicate remote events to remove")
        return existing, duplicates

    async def _delete(
        self, calendar_id: str, remote: RemoteEvent, result: ReconcileResult
    ) -> None:
        try:
            await self.adapter.delete(calendar_id, remote)
        except Exception as e:
            logger.warning(f"{self.adapter.name}: delete {remote.source_id} failed: {e}")
            result.record(remote.source_id, SyncAction.DELETED, str(e) or type(e).__name__)
        else:
            result.record(remote.source_id, SyncAction.DELETED)
