"""Google Calendar adapter."""

import logging
from typing import Any
from urllib.parse import quote

from epitech_sync.constants import TIMEZONE_NAME
from epitech_sync.dates import to_local
from epitech_sync.models.event import CanonicalEvent
from epitech_sync.remote.base import AuthenticatedRequest, RemoteEvent

logger = logging.getLogger(__name__)

GOOGLE_CALENDAR_API = "https://www.googleapis.com/calendar/v3"

# Private extended properties written on every mirrored event
SOURCE_ID_PROPERTY = "epitechId"
SYNC_MARKER_PROPERTY = "epitechSync"
SYNC_MARKER_VALUE = "1"

LIST_PAGE_SIZE = 2500


class GoogleCalendarAdapter:
    """Mirror canonical events into a Google calendar."""

    name = "Google"

    def __init__(self, transport: AuthenticatedRequest):
        self.transport = transport

    @staticmethod
    def _events_path(calendar_id: str, event_id: str | None = None) -> str:
        path = f"/calendars/{quote(calendar_id, safe='')}/events"
        if event_id is not None:
            path += f"/{quote(event_id, safe='')}"
        return path

    @staticmethod
    def to_remote_payload(event: CanonicalEvent) -> dict[str, Any]:
        """Full Google event body for a canonical event."""
        payload: dict[str, Any] = {
            "summary": event.title,
            "description": event.description,
            "start": {
                "dateTime": to_local(event.start_date).isoformat(),
                "timeZone": TIMEZONE_NAME,
            },
            "end": {
                "dateTime": to_local(event.end_date).isoformat(),
                "timeZone": TIMEZONE_NAME,
            },
            "extendedProperties": {
                "private": {
                    SOURCE_ID_PROPERTY: event.id,
                    SYNC_MARKER_PROPERTY: SYNC_MARKER_VALUE,
                    "moduleCode": event.module.code,
                    "activityCode": event.activity.code,
                    "eventCode": event.event_code,
                }
            },
        }
        if event.location:
            payload["location"] = event.location
        return payload

    async def list_tagged(self, calendar_id: str) -> list[RemoteEvent]:
        events: list[RemoteEvent] = []
        params: dict[str, Any] = {
            "maxResults": LIST_PAGE_SIZE,
            "privateExtendedProperty": f"{SYNC_MARKER_PROPERTY}={SYNC_MARKER_VALUE}",
        }

        while True:
            payload = await self.transport.request(
                "GET", self._events_path(calendar_id), params=params
            )
            for item in payload.get("items") or []:
                private = (item.get("extendedProperties") or {}).get("private") or {}
                source_id = private.get(SOURCE_ID_PROPERTY)
                if source_id and item.get("id"):
                    events.append(
                        RemoteEvent(remote_id=item["id"], source_id=source_id, raw=item)
                    )

            next_page_token = payload.get("nextPageToken")
            if not next_page_token:
                break
            params = {**params, "pageToken": next_page_token}

        logger.debug(f"Google calendar {calendar_id}: {len(events)} tagged events")
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
        # PUT replaces the whole resource, clobbering manual edits
        body = {**self.to_remote_payload(event), "id": remote.remote_id}
        await self.transport.request(
            "PUT",
            self._events_path(calendar_id, remote.remote_id),
            json_body=body,
        )

    async def delete(self, calendar_id: str, remote: RemoteEvent) -> None:
        await self.transport.request(
            "DELETE", self._events_path(calendar_id, remote.remote_id)
        )

    async def find_or_create_calendar(self, name: str) -> str:
        response = await self.transport.request("GET", "/users/me/calendarList")
        for calendar in response.get("items") or []:
            if calendar.get("summary") == name and not calendar.get("primary"):
                return calendar["id"]

        logger.info(f"Creating Google calendar '{name}'")
        created = await self.transport.request(
            "POST",
            "/calendars",
            json_body={
                "summary": name,
                "description": "Epitech intranet calendar - synced by Epitech Calendar Sync",
                "timeZone": TIMEZONE_NAME,
            },
        )
        return created["id"]
