"""String key-value stores for the local adapter.

These play the part of the browser's ``localStorage``: flat string keys,
string values, no transactions.  ``MemoryKeyValueStore`` lives only as
long as the process; ``JsonFileKeyValueStore`` keeps every key in one
JSON file and rewrites it after each mutation.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from crabcms.storage.errors import CorruptDataError, StorageUnavailableError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Minimal ``localStorage``-shaped interface."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the value for *key*, or None if unset."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete *key*; missing keys are ignored."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return all keys currently set."""


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileKeyValueStore(KeyValueStore):
    """All keys in a single JSON object on disk.

    The file is read lazily on first access and written after every
    mutation.  A missing file is an empty store.

    Raises:
        StorageUnavailableError: When the file cannot be read or written.
        CorruptDataError: When the file is not a JSON object of strings.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._items: dict[str, str] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if self._items is not None:
            return self._items
        if not self._path.exists():
            self._items = {}
            return self._items
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot read {self._path}: {exc}") from exc
        try:
            raw = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as exc:
            raise CorruptDataError(f"Corrupt key-value file {self._path}: {exc}") from exc
        if not isinstance(raw, dict) or not all(isinstance(v, str) for v in raw.values()):
            raise CorruptDataError(f"Key-value file {self._path} is not a string map")
        self._items = raw
        return self._items

    def _save(self, items: dict[str, str]) -> None:
        """Write *items* to disk, then adopt them as the cached state."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(items, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot write {self._path}: {exc}") from exc
        self._items = items

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        self._save({**self._load(), key: value})

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            self._save({k: v for k, v in items.items() if k != key})

    def keys(self) -> list[str]:
        return list(self._load())
