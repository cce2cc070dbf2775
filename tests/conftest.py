"""Shared fixtures: raw records, canonical events and in-memory fakes."""

from datetime import date, datetime

import pytest

from epitech_sync.constants import PARIS_TZ
from epitech_sync.models.event import ActivityRef, CanonicalEvent, ModuleRef
from epitech_sync.models.raw import RawEvent
from epitech_sync.remote.base import RemoteEvent
from epitech_sync.source.intranet import AuthCheck
from epitech_sync.storage.store import MemoryStore
from epitech_sync.storage.sync_storage import SyncStorage

FIXED_NOW = datetime(2025, 3, 1, 9, 0, tzinfo=PARIS_TZ)


def make_raw_record(**overrides) -> dict:
    """Intranet planning record as returned by /planning/load."""
    record = {
        "scolaryear": "2024",
        "codemodule": "B-INN-000",
        "codeinstance": "PAR-0-1",
        "codeacti": "acti-1",
        "codeevent": "event-1",
        "titlemodule": "Innovation",
        "acti_title": "Kick-off",
        "start": "2025-03-01 09:00:00",
        "end": "2025-03-01 12:00:00",
        "room": {"code": "FR/PAR/Main/Room-1"},
        "instance_location": "FR/PAR",
        "prof_inst": [{"login": "jdoe", "title": "John Doe"}],
        "semester": 2,
        "event_registered": "registered",
        "registered": False,
        "past": False,
        "nb_hours": "3h",
        "is_rdv": "0",
        "rdv_indiv_registered": None,
        "rdv_group_registered": None,
    }
    record.update(overrides)
    return record


def make_event(event_id: str = "epitech-acti-1-event-1", **overrides) -> CanonicalEvent:
    """Canonical event with sensible defaults."""
    fields = {
        "id": event_id,
        "title": f"EPITECH - {event_id}",
        "description": "Module: Innovation",
        "location": "Main: Room 1",
        "start_date": datetime(2025, 3, 1, 9, 0, tzinfo=PARIS_TZ),
        "end_date": datetime(2025, 3, 1, 12, 0, tzinfo=PARIS_TZ),
        "module": ModuleRef(code="B-INN-000", instance="PAR-0-1", title="Innovation"),
        "activity": ActivityRef(code="acti-1", title="Kick-off"),
        "event_code": "event-1",
        "is_registered": True,
    }
    fields.update(overrides)
    return CanonicalEvent(**fields)


class FakeAdapter:
    """In-memory remote calendar with injectable failures."""

    name = "Fake"

    def __init__(self, existing: dict[str, RemoteEvent] | None = None):
        self.events: dict[str, RemoteEvent] = dict(existing or {})
        self.duplicates: list[RemoteEvent] = []
        self.calls: list[tuple[str, str]] = []
        self.fail_on: dict[tuple[str, str], Exception] = {}
        self.list_error: Exception | None = None
        self.calendars: dict[str, str] = {}
        self._next_id = 0

    def _check(self, action: str, source_id: str) -> None:
        self.calls.append((action, source_id))
        error = self.fail_on.get((action, source_id))
        if error is not None:
            raise error

    async def list_tagged(self, calendar_id: str) -> list[RemoteEvent]:
        if self.list_error is not None:
            raise self.list_error
        return list(self.events.values()) + list(self.duplicates)

    async def create(self, calendar_id: str, event: CanonicalEvent) -> str:
        self._check("create", event.id)
        self._next_id += 1
        remote_id = f"remote-{self._next_id}"
        self.events[event.id] = RemoteEvent(remote_id=remote_id, source_id=event.id)
        return remote_id

    async def update(self, calendar_id: str, remote: RemoteEvent, event: CanonicalEvent) -> None:
        self._check("update", event.id)

    async def delete(self, calendar_id: str, remote: RemoteEvent) -> None:
        self._check("delete", remote.source_id)
        if remote in self.duplicates:
            self.duplicates.remove(remote)
        else:
            self.events.pop(remote.source_id, None)

    async def find_or_create_calendar(self, name: str) -> str:
        return self.calendars.setdefault(name, f"cal-{name}")


class FakeSource:
    """Intranet stand-in returning fixed records."""

    def __init__(self, records: list[dict] | None = None, authenticated: bool = True):
        self.records = [RawEvent.model_validate(r) for r in (records or [])]
        self.authenticated = authenticated
        self.fetch_calls: list[tuple[date, date]] = []

    async def check_authentication(self) -> AuthCheck:
        return AuthCheck(authenticated=self.authenticated)

    async def fetch_planning(self, start: date, end: date) -> list[RawEvent]:
        self.fetch_calls.append((start, end))
        return list(self.records)


@pytest.fixture
def raw_record():
    return make_raw_record()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def storage(store):
    return SyncStorage(store)
