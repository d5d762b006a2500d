"""History sinks backed by process memory or a key-value store."""

from __future__ import annotations

import logging
import threading
from datetime import datetime

from cry_translator.errors import HistoryError
from cry_translator.history.base import HistorySink
from cry_translator.models.history import HistoryEntry
from cry_translator.models.result import ClassificationResult
from cry_translator.storage import KeyValueStore, load_json_list, save_json_list

logger = logging.getLogger(__name__)

HISTORY_KEY = "@lullaby_cry_history"


class InMemoryHistory(HistorySink):
    """Thread-safe in-memory history.

    Parameters
    ----------
    max_entries:
        Oldest entries beyond this count are dropped.  ``None`` keeps
        everything.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        self._entries: list[HistoryEntry] = []
        self._max_entries = max_entries
        self._lock = threading.Lock()

    def append(self, result: ClassificationResult, timestamp: datetime) -> None:
        with self._lock:
            self._entries.insert(0, HistoryEntry(result=result, timestamp=timestamp))
            if self._max_entries is not None:
                del self._entries[self._max_entries:]

    def list(self) -> list[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class StoreHistory(HistorySink):
    """History persisted as a JSON list in a :class:`KeyValueStore`.

    Parameters
    ----------
    store:
        Backing store.
    key:
        Key the history list is stored under.
    """

    def __init__(self, store: KeyValueStore, key: str = HISTORY_KEY) -> None:
        self._store = store
        self._key = key
        self._lock = threading.Lock()

    def append(self, result: ClassificationResult, timestamp: datetime) -> None:
        entry = HistoryEntry(result=result, timestamp=timestamp)
        with self._lock:
            try:
                items = load_json_list(self._store, self._key)
                items.insert(0, entry.to_dict())
                save_json_list(self._store, self._key, items)
            except Exception as exc:
                raise HistoryError(f"Failed to save cry history: {exc}") from exc

    def list(self) -> list[HistoryEntry]:
        entries: list[HistoryEntry] = []
        for item in load_json_list(self._store, self._key):
            try:
                entries.append(HistoryEntry.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed history entry: %r", item)
        return entries

    def clear(self) -> None:
        with self._lock:
            self._store.remove_item(self._key)
