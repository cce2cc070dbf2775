"""Tests for persisted settings, status and event cache."""

import json
from datetime import datetime

import pytest

from conftest import make_event
from epitech_sync.constants import PARIS_TZ, SETTINGS_KEY
from epitech_sync.exceptions import StorageError
from epitech_sync.models.settings import AutoSyncFrequency
from epitech_sync.storage.store import JsonFileStore, MemoryStore
from epitech_sync.storage.sync_storage import SyncStorage


async def test_defaults_when_empty(storage):
    settings = await storage.get_settings()

    assert settings.event_prefix == "EPITECH - "
    assert settings.sync_period.start == "today"
    assert settings.sync_period.end == "+12months"
    assert settings.auto_sync.frequency is AutoSyncFrequency.ONCE_DAILY
    assert settings.google.is_active is False


async def test_partial_stored_settings_fill_defaults():
    """Missing nested keys fall back to defaults."""
    storage = SyncStorage(MemoryStore({SETTINGS_KEY: {"sync_period": {"end": "+3months"}}}))

    settings = await storage.get_settings()

    assert settings.sync_period.start == "today"
    assert settings.sync_period.end == "+3months"


async def test_save_settings_deep_merges(storage):
    await storage.save_settings({"auto_sync": {"enabled": True}})
    settings = await storage.save_settings({"auto_sync": {"frequency": "every_visit"}})

    assert settings.auto_sync.enabled is True
    assert settings.auto_sync.frequency is AutoSyncFrequency.EVERY_VISIT


async def test_invalid_settings_update(storage):
    with pytest.raises(StorageError):
        await storage.save_settings({"auto_sync": {"frequency": "hourly"}})


async def test_update_remote_settings_unknown_service(storage):
    with pytest.raises(ValueError):
        await storage.update_remote_settings("caldav", enabled=True)


async def test_cached_events_round_trip(storage):
    """Cached instants come back as equal aware datetimes."""
    events = [make_event("A"), make_event("B", is_registered=False)]

    await storage.cache_events(events)

    cached = await storage.get_cached_events()
    assert [e.model_dump() for e in cached] == [e.model_dump() for e in events]


async def test_no_cache(storage):
    assert await storage.get_cached_events() is None


@pytest.mark.parametrize(
    "frequency, last_sync_date, expected",
    [
        ("every_visit", "2025-03-01", True),
        ("once_daily", "2025-03-01", False),
        ("once_daily", "2025-02-28", True),
        ("once_daily", None, True),
        ("manual", None, False),
    ],
)
async def test_should_auto_sync(storage, frequency, last_sync_date, expected):
    await storage.save_settings(
        {
            "auto_sync": {"enabled": True, "frequency": frequency},
            "last_sync_date": last_sync_date,
        }
    )
    now = datetime(2025, 3, 1, 18, 0, tzinfo=PARIS_TZ)

    assert await storage.should_auto_sync(now) is expected


async def test_auto_sync_disabled(storage):
    assert await storage.should_auto_sync(datetime(2025, 3, 1, tzinfo=PARIS_TZ)) is False


async def test_json_file_store_persists(tmp_path):
    path = tmp_path / "data" / "store.json"
    storage = SyncStorage(JsonFileStore(path))

    await storage.save_settings({"event_prefix": "[EPI] "})

    reloaded = SyncStorage(JsonFileStore(path))
    assert (await reloaded.get_settings()).event_prefix == "[EPI] "
    assert json.loads(path.read_text())[SETTINGS_KEY]["event_prefix"] == "[EPI] "


async def test_json_file_store_corrupt(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json")

    with pytest.raises(StorageError):
        await JsonFileStore(path).get("anything")


async def test_clear_all(storage, store):
    await storage.save_settings({"event_prefix": "X"})
    await storage.clear_all()

    assert store.data == {}
