"""Feeding log tracker.

Keeps a most-recent-first list of feedings in a key-value store and
answers "how long since the last feed?" for the classifier.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

from cry_translator.context.base import FeedingContextProvider
from cry_translator.storage import InMemoryStore, KeyValueStore, load_json_list, save_json_list

logger = logging.getLogger(__name__)

FEEDING_KEY = "@lullaby_feeding_logs"


class FeedingType(str, Enum):
    BOTTLE = "BOTTLE"
    BREAST = "BREAST"


@dataclass(frozen=True)
class FeedingLog:
    """A single logged feeding.

    ``amount`` and ``unit`` apply to bottle feeds; ``side`` and
    ``duration_seconds`` to breast feeds.
    """

    id: str
    timestamp: datetime
    type: FeedingType
    amount: float | None = None
    unit: str | None = None
    side: str | None = None
    duration_seconds: int | None = None
    note: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        data["type"] = self.type.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FeedingLog:
        return cls(
            id=str(data["id"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            type=FeedingType(data["type"]),
            amount=data.get("amount"),
            unit=data.get("unit"),
            side=data.get("side"),
            duration_seconds=data.get("duration_seconds"),
            note=data.get("note"),
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FeedingTracker(FeedingContextProvider):
    """Feeding log backed by a :class:`KeyValueStore`.

    Parameters
    ----------
    store:
        Backing store.  Defaults to a fresh :class:`InMemoryStore`.
    clock:
        Returns the current time; timestamps and elapsed-time
        calculations use it.
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store if store is not None else InMemoryStore()
        self._clock = clock
        self._lock = threading.Lock()

    def log_feeding(
        self,
        feeding_type: FeedingType | str,
        amount: float | None = None,
        unit: str | None = None,
        side: str | None = None,
        duration_seconds: int | None = None,
        note: str | None = None,
    ) -> FeedingLog:
        """Record a feeding at the current time and return it."""
        log = FeedingLog(
            id=uuid.uuid4().hex,
            timestamp=self._clock(),
            type=FeedingType(feeding_type),
            amount=amount,
            unit=unit,
            side=side,
            duration_seconds=duration_seconds,
            note=note,
        )
        with self._lock:
            items = load_json_list(self._store, FEEDING_KEY)
            items.insert(0, log.to_dict())
            save_json_list(self._store, FEEDING_KEY, items)
        logger.info("Logged %s feeding %s", log.type.value, log.id)
        return log

    def get_logs(self) -> list[FeedingLog]:
        """Return feedings, most recent first."""
        logs: list[FeedingLog] = []
        for item in load_json_list(self._store, FEEDING_KEY):
            try:
                logs.append(FeedingLog.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed feeding log: %r", item)
        return logs

    def get_last_feeding(self) -> FeedingLog | None:
        logs = self.get_logs()
        return logs[0] if logs else None

    def delete_feeding(self, log_id: str) -> None:
        with self._lock:
            items = [
                item for item in load_json_list(self._store, FEEDING_KEY)
                if item.get("id") != log_id
            ]
            save_json_list(self._store, FEEDING_KEY, items)

    def clear_all(self) -> None:
        with self._lock:
            self._store.remove_item(FEEDING_KEY)

    def last_feeding_hours_ago(self) -> float | None:
        last = self.get_last_feeding()
        if last is None:
            return None
        return (self._clock() - last.timestamp).total_seconds() / 3600.0
