"""Key-value storage backing the history and tracker collaborators.

Values are JSON-encoded strings stored under string keys.  Durability
is best-effort: ``JsonFileStore`` rewrites a single file on every
change and makes no attempt at atomic writes or locking across
processes.
"""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Abstract string-to-string store."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the value stored under ``key``, or ``None``."""
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``.  Missing keys are ignored."""
        ...


class InMemoryStore(KeyValueStore):
    """Process-local store, mainly for tests and ephemeral sessions."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """Store persisted as a single JSON object on disk.

    Parameters
    ----------
    path:
        File holding the store.  Created on first write.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.error("Failed to read store file %s", self._path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.error("Store file %s does not hold a JSON object", self._path)
            return {}
        return data

    def _save(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._save(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._save(data)


def load_json_list(store: KeyValueStore, key: str) -> list[dict[str, Any]]:
    """Read a JSON list from ``store``; corrupt or missing values read as empty."""
    raw = store.get_item(key)
    if raw is None:
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        logger.error("Failed to decode stored list under %s", key, exc_info=True)
        return []
    if not isinstance(value, list):
        logger.error("Stored value under %s is not a list", key)
        return []
    return value


def save_json_list(store: KeyValueStore, key: str, items: list[dict[str, Any]]) -> None:
    store.set_item(key, json.dumps(items))
