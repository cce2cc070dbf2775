"""Exception hierarchy for sync operations."""


class SyncError(Exception):
    """Base exception for sync operations."""

    pass


class DateParseError(SyncError, ValueError):
    """Date string could not be parsed."""

    pass


class SourceError(SyncError):
    """Error while fetching the intranet planning."""

    pass


class NotAuthenticatedError(SourceError):
    """Intranet session missing or expired."""

    pass


class MalformedPayloadError(SourceError):
    """Intranet returned an unexpected payload shape."""

    pass


class RemoteCalendarError(SyncError):
    """Base exception for remote calendar services."""

    pass


class ReconnectRequiredError(RemoteCalendarError):
    """Remote service rejected the bearer token (HTTP 401)."""

    pass


class RemoteRequestError(RemoteCalendarError):
    """Remote calendar API request failed."""

    def __init__(self, *, service: str, status_code: int, message: str) -> None:
        self.service = service
        self.status_code = status_code
        self.message = message
        super().__init__(f"{service} API error: {status_code} - {message}")


class CalendarNotConnectedError(RemoteCalendarError):
    """Remote calendar has no configured calendar id or token."""

    pass


class ExportError(SyncError):
    """Error during ICS export."""

    pass


class StorageError(SyncError):
    """Persisted store could not be read or written."""

    pass
