"""Tests for the command line interface."""

import asyncio
import json

import pytest
from typer.testing import CliRunner

from conftest import make_event
from epitech_sync.constants import SETTINGS_KEY
from epitech_sync.storage.store import JsonFileStore
from epitech_sync.storage.sync_storage import SyncStorage
from epitech_sync_cli.parser import app

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    data_dir = tmp_path / "data"
    monkeypatch.setenv("EPITECH_DATA_DIR", str(data_dir))
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    return data_dir


def test_settings_update(data_dir):
    """Options are persisted and echoed back."""
    result = runner.invoke(
        app,
        ["settings", "--prefix", "[EPI] ", "--auto-sync", "--frequency", "every_visit"],
    )

    assert result.exit_code == 0, result.output
    stored = json.loads((data_dir / "store.json").read_text())[SETTINGS_KEY]
    assert stored["event_prefix"] == "[EPI] "
    assert stored["auto_sync"] == {"enabled": True, "frequency": "every_visit"}


def test_export_from_cache(data_dir, tmp_path):
    """Export writes cached events to the requested file."""
    storage = SyncStorage(JsonFileStore(data_dir / "store.json"))
    asyncio.run(storage.cache_events([make_event("cached")]))
    output = tmp_path / "out.ics"

    result = runner.invoke(app, ["export", "--output", str(output)])

    assert result.exit_code == 0, result.output
    content = output.read_bytes().decode("utf-8")
    assert content.startswith("BEGIN:VCALENDAR\r\n")
    assert "UID:cached@epitech.eu" in content


def test_export_range_requires_both_bounds(data_dir):
    result = runner.invoke(app, ["export", "--from", "2025-03-01"])
    assert result.exit_code != 0


def test_no_command_shows_help(data_dir):
    result = runner.invoke(app, [])
    assert "sync" in result.output
