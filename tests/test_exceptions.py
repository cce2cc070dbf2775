"""Tests for exception classes."""

import pytest

from epitech_sync.exceptions import (
    CalendarNotConnectedError,
    DateParseError,
    ExportError,
    MalformedPayloadError,
    NotAuthenticatedError,
    ReconnectRequiredError,
    RemoteCalendarError,
    RemoteRequestError,
    SourceError,
    StorageError,
    SyncError,
)


def test_sync_error():
    """Test SyncError base exception."""
    error = SyncError("Test error")
    assert str(error) == "Test error"
    assert isinstance(error, Exception)


@pytest.mark.parametrize(
    "error_class, parent",
    [
        (DateParseError, SyncError),
        (DateParseError, ValueError),
        (SourceError, SyncError),
        (NotAuthenticatedError, SourceError),
        (MalformedPayloadError, SourceError),
        (RemoteCalendarError, SyncError),
        (ReconnectRequiredError, RemoteCalendarError),
        (CalendarNotConnectedError, RemoteCalendarError),
        (ExportError, SyncError),
        (StorageError, SyncError),
    ],
)
def test_hierarchy(error_class, parent):
    """Test each error's place in the hierarchy."""
    error = error_class("failed")
    assert str(error) == "failed"
    assert isinstance(error, parent)


def test_remote_request_error():
    """Test RemoteRequestError carries status and message."""
    error = RemoteRequestError(service="Outlook", status_code=404, message="Not Found")
    assert str(error) == "Outlook API error: 404 - Not Found"
    assert error.status_code == 404
    assert isinstance(error, RemoteCalendarError)
