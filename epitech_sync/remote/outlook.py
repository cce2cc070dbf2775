"""Microsoft Outlook calendar adapter (Graph API)."""

import logging
from typing import Any
from urllib.parse import quote

from epitech_sync.constants import TIMEZONE_NAME
from epitech_sync.dates import to_local
from epitech_sync.models.event import CanonicalEvent
from epitech_sync.remote.base import AuthenticatedRequest, RemoteEvent

logger = logging.getLogger(__name__)

GRAPH_API = "https://graph.microsoft.com/v1.0"

# Single-value extended properties written on every mirrored event
PROPERTY_SET = "{66f5a359-4659-4830-9070-00047ec6ac6e}"
SOURCE_ID_PROPERTY = f"String {PROPERTY_SET} Name EpitechId"
SYNC_MARKER_PROPERTY = f"String {PROPERTY_SET} Name EpitechSync"
SYNC_MARKER_VALUE = "1"

LIST_PAGE_SIZE = 100


def _graph_datetime(value) -> str:
    # Graph wants wall-clock time next to an explicit timeZone
    return to_local(value).replace(tzinfo=None).isoformat()


class OutlookCalendarAdapter:
    """Mirror canonical events into an Outlook calendar."""

    name = "Outlook"

    def __init__(self, transport: AuthenticatedRequest):
        self.transport = transport

    @staticmethod
    def _events_path(calendar_id: str, event_id: str | None = None) -> str:
        path = f"/me/calendars/{quote(calendar_id, safe='')}/events"
        if event_id is not None:
            path += f"/{quote(event_id, safe='')}"
        return path

    @staticmethod
    def to_remote_payload(event: CanonicalEvent) -> dict[str, Any]:
        """Full Graph event body for a canonical event."""
        return {
            "subject": event.title,
            "body": {"contentType": "text", "content": event.description},
            "location": {"displayName": event.location},
            "start": {
                "dateTime": _graph_datetime(event.start_date),
                "timeZone": TIMEZONE_NAME,
            },
            "end": {
                "dateTime": _graph_datetime(event.end_date),
                "timeZone": TIMEZONE_NAME,
            },
            "singleValueExtendedProperties": [
                {"id": SOURCE_ID_PROPERTY, "value": event.id},
                {"id": SYNC_MARKER_PROPERTY, "value": SYNC_MARKER_VALUE},
            ],
        }

    async def list_tagged(self, calendar_id: str) -> list[RemoteEvent]:
        events: list[RemoteEvent] = []
        path: str | None = self._events_path(calendar_id)
        params: dict[str, Any] | None = {
            "$filter": (
                f"singleValueExtendedProperties/any(ep: ep/id eq '{SYNC_MARKER_PROPERTY}'"
                f" and ep/value eq '{SYNC_MARKER_VALUE}')"
            ),
            "$expand": f"singleValueExtendedProperties($filter=id eq '{SOURCE_ID_PROPERTY}')",
            "$top": LIST_PAGE_SIZE,
        }

        while path:
            payload = await self.transport.request("GET", path, params=params)
            for item in payload.get("value") or []:
                source_id = next(
                    (
                        prop.get("value")
                        for prop in item.get("singleValueExtendedProperties") or []
                        if prop.get("id", "").lower() == SOURCE_ID_PROPERTY.lower()
                    ),
                    None,
                )
                if source_id and item.get("id"):
                    events.append(
                        RemoteEvent(remote_id=item["id"], source_id=source_id, raw=item)
                    )

            # nextLink already embeds the query string
            path = payload.get("@odata.nextLink")
            params = None

        logger.debug(f"Outlook calendar {calendar_id}: {len(events)} tagged events")
        return events

    async def create(self, calendar_id: str, event: CanonicalEvent) -> str:
        created = await self.transport.request(
            "POST",
            self._events_path(calendar_id),
            json_body=self.to_remote_payload(event),
        )
        return str(created.get("id", ""))

    async def update(
        self, calendar_id: str, remote: RemoteEvent, event: CanonicalEvent
    ) -> None:
        # Every owned field is sent, so manual edits are overwritten
        await self.transport.request(
            "PATCH",
            self._events_path(calendar_id, remote.remote_id),
            json_body=self.to_remote_payload(event),
        )

    async def delete(self, calendar_id: str, remote: RemoteEvent) -> None:
        await self.transport.request(
            "DELETE", self._events_path(calendar_id, remote.remote_id)
        )

    async def find_or_create_calendar(self, name: str) -> str:
        response = await self.transport.request("GET", "/me/calendars")
        for calendar in response.get("value") or []:
            if calendar.get("name") == name and not calendar.get("isDefaultCalendar"):
                return calendar["id"]

        logger.info(f"Creating Outlook calendar '{name}'")
        created = await self.transport.request(
            "POST", "/me/calendars", json_body={"name": name}
        )
        return created["id"]
