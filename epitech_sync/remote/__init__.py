"""Remote calendar adapters."""

from epitech_sync.remote.base import AuthenticatedRequest, RemoteCalendarAdapter, RemoteEvent
from epitech_sync.remote.google import GOOGLE_CALENDAR_API, GoogleCalendarAdapter
from epitech_sync.remote.outlook import GRAPH_API, OutlookCalendarAdapter
from epitech_sync.remote.transport import BearerTransport, static_token

__all__ = [
    "AuthenticatedRequest",
    "BearerTransport",
    "GOOGLE_CALENDAR_API",
    "GRAPH_API",
    "GoogleCalendarAdapter",
    "OutlookCalendarAdapter",
    "RemoteCalendarAdapter",
    "RemoteEvent",
    "static_token",
]
