"""Key-value stores for settings, status and cached events."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Protocol

from epitech_sync.exceptions import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Protocol for persisted key-value stores."""

    async def get(self, key: str) -> Any | None:
        """Return the stored JSON value for ``key`` or None."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value."""
        ...

    async def clear(self) -> None:
        """Remove every key."""
        ...


class MemoryStore:
    """In-process store, mostly for tests and dry runs."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self.data: dict[str, Any] = dict(initial or {})

    async def get(self, key: str) -> Any | None:
        return self.data.get(key)

    async def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    async def clear(self) -> None:
        self.data.clear()


class JsonFileStore:
    """Store backed by a single JSON document on disk.

    Reads and writes run in a worker thread. Updates are read-then-write
    without locking; only one sync flow touches the file at a time.
    """

    def __init__(self, path: Path):
        self.path = path

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Store {self.path} does not hold a JSON object")
        return data

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Failed to write store {self.path}: {e}") from e

    def _set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    async def get(self, key: str) -> Any | None:
        data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._set, key, value)

    async def clear(self) -> None:
        await asyncio.to_thread(self._write, {})
        logger.info(f"Cleared store {self.path}")
