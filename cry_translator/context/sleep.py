"""Sleep log tracker.

Tracks naps and night sleep, answers "how long has the baby been
awake?" for the classifier and predicts the next nap from a fixed
wake window.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable

from cry_translator.context.base import SleepContextProvider
from cry_translator.storage import InMemoryStore, KeyValueStore, load_json_list, save_json_list

logger = logging.getLogger(__name__)

SLEEP_KEY = "@lullaby_sleep_logs"

WAKE_WINDOW_MINUTES = 90
"""Typical wake window for a 3-6 month old."""


class SleepType(str, Enum):
    NAP = "NAP"
    NIGHT_SLEEP = "NIGHT_SLEEP"


@dataclass(frozen=True)
class SleepLog:
    """A sleep period; ``end_time`` is ``None`` while the baby is asleep."""

    id: str
    start_time: datetime
    type: SleepType = SleepType.NAP
    end_time: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "start_time": self.start_time.isoformat(),
            "type": self.type.value,
            "end_time": self.end_time.isoformat() if self.end_time else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SleepLog:
        end_time = data.get("end_time")
        return cls(
            id=str(data["id"]),
            start_time=datetime.fromisoformat(data["start_time"]),
            type=SleepType(data.get("type", SleepType.NAP.value)),
            end_time=datetime.fromisoformat(end_time) if end_time else None,
        )


@dataclass(frozen=True)
class SleepStatus:
    is_asleep: bool
    current_log: SleepLog | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SleepTracker(SleepContextProvider):
    """Sleep log backed by a :class:`KeyValueStore`.

    Parameters
    ----------
    store:
        Backing store.  Defaults to a fresh :class:`InMemoryStore`.
    clock:
        Returns the current time.
    wake_window_minutes:
        Wake window used by :meth:`calculate_next_nap`.
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        clock: Callable[[], datetime] = _utcnow,
        wake_window_minutes: int = WAKE_WINDOW_MINUTES,
    ) -> None:
        self._store = store if store is not None else InMemoryStore()
        self._clock = clock
        self._wake_window = timedelta(minutes=wake_window_minutes)
        self._lock = threading.Lock()

    def _save(self, logs: list[SleepLog]) -> None:
        save_json_list(self._store, SLEEP_KEY, [log.to_dict() for log in logs])

    def log_sleep_start(self, sleep_type: SleepType | str = SleepType.NAP) -> SleepLog:
        """Start a new sleep period at the current time."""
        log = SleepLog(id=uuid.uuid4().hex, start_time=self._clock(), type=SleepType(sleep_type))
        with self._lock:
            logs = self.get_logs()
            logs.insert(0, log)
            self._save(logs)
        logger.info("Sleep started (%s, id=%s)", log.type.value, log.id)
        return log

    def log_sleep_end(self, log_id: str) -> SleepLog | None:
        """End the sleep period ``log_id``.

        Returns the updated log, or ``None`` if no log has that id.
        """
        with self._lock:
            logs = self.get_logs()
            for i, log in enumerate(logs):
                if log.id == log_id:
                    logs[i] = replace(log, end_time=self._clock())
                    self._save(logs)
                    logger.info("Sleep ended (id=%s)", log_id)
                    return logs[i]
        logger.warning("No sleep log with id %s", log_id)
        return None

    def get_logs(self) -> list[SleepLog]:
        """Return sleep periods, most recent first."""
        logs: list[SleepLog] = []
        for item in load_json_list(self._store, SLEEP_KEY):
            try:
                logs.append(SleepLog.from_dict(item))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed sleep log: %r", item)
        return logs

    def get_last_wake_time(self) -> datetime | None:
        """Return the end time of the most recent completed sleep."""
        for log in self.get_logs():
            if log.end_time is not None:
                return log.end_time
        return None

    def calculate_next_nap(self, last_wake_time: datetime) -> datetime:
        return last_wake_time + self._wake_window

    def get_current_status(self) -> SleepStatus:
        logs = self.get_logs()
        if logs and logs[0].end_time is None:
            return SleepStatus(is_asleep=True, current_log=logs[0])
        return SleepStatus(is_asleep=False)

    def clear_all(self) -> None:
        with self._lock:
            self._store.remove_item(SLEEP_KEY)

    def last_wake_minutes_ago(self) -> float | None:
        last_wake = self.get_last_wake_time()
        if last_wake is None:
            return None
        return (self._clock() - last_wake).total_seconds() / 60.0
