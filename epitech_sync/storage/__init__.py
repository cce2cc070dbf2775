"""Persistence for settings, status and cached events."""

from epitech_sync.storage.store import JsonFileStore, KeyValueStore, MemoryStore
from epitech_sync.storage.sync_storage import REMOTE_SERVICES, SyncStorage

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "REMOTE_SERVICES",
    "SyncStorage",
]
