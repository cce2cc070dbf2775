"""Reconciliation and sync result models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class SyncAction(str, Enum):
    """Mutation applied to a remote event."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class EventSyncDetail(BaseModel):
    """Outcome of one per-event mutation."""

    event_id: str
    action: SyncAction
    success: bool
    error: str | None = None


@dataclass
class ReconcileResult:
    """Counts and errors from one reconciliation pass against one calendar."""

    created: int = 0
    updated: int = 0
    deleted: int = 0
    errors: list[str] = field(default_factory=list)
    details: list[EventSyncDetail] = field(default_factory=list)

    def record(self, event_id: str, action: SyncAction, error: str | None = None) -> None:
        """Record a mutation outcome, bumping the matching counter on success."""
        if error is None:
            if action is SyncAction.CREATED:
                self.created += 1
            elif action is SyncAction.UPDATED:
                self.updated += 1
            else:
                self.deleted += 1
        else:
            self.errors.append(f"{event_id}: {error}")
        self.details.append(
            EventSyncDetail(
                event_id=event_id, action=action, success=error is None, error=error
            )
        )


class SyncResult(BaseModel):
    """Aggregated result of one orchestrator run, returned and never raised."""

    success: bool = True
    timestamp: datetime
    events_processed: int = 0
    events_created: int = 0
    events_updated: int = 0
    events_deleted: int = 0
    errors: list[str] = Field(default_factory=list)
    details: list[EventSyncDetail] = Field(default_factory=list)

    def absorb(self, label: str, result: ReconcileResult) -> None:
        """Add one service's counts, prefixing its errors with ``label``."""
        self.events_created += result.created
        self.events_updated += result.updated
        self.events_deleted += result.deleted
        self.errors.extend(f"{label}: {error}" for error in result.errors)
        self.details.extend(result.details)
