"""Protocols shared by remote calendar adapters."""

from dataclasses import dataclass, field
from typing import Any, Protocol

from epitech_sync.models.event import CanonicalEvent


@dataclass(frozen=True)
class RemoteEvent:
    """Event held by a remote calendar and tagged with a canonical id."""

    remote_id: str
    source_id: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False)


class AuthenticatedRequest(Protocol):
    """Authenticated JSON request function for one remote service."""

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON body (``{}`` for 204)."""
        ...


class RemoteCalendarAdapter(Protocol):
    """Create/update/delete access to one remote calendar service."""

    name: str

    async def list_tagged(self, calendar_id: str) -> list[RemoteEvent]:
        """Every tagged remote event, across all result pages.

        Several remote events may carry the same canonical id.
        """
        ...

    async def create(self, calendar_id: str, event: CanonicalEvent) -> str:
        """Create a remote event tagged with ``event.id``; returns its remote id."""
        ...

    async def update(
        self, calendar_id: str, remote: RemoteEvent, event: CanonicalEvent
    ) -> None:
        """Overwrite a remote event with the full canonical field set."""
        ...

    async def delete(self, calendar_id: str, remote: RemoteEvent) -> None:
        """Delete a remote event."""
        ...

    async def find_or_create_calendar(self, name: str) -> str:
        """Return the id of the non-default calendar called ``name``."""
        ...
