"""Context snapshots supplied to the classifier alongside audio features."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FeedingContext:
    """Read-only snapshot of the feeding log at analysis time."""

    hours_since_last_feeding: float | None = None
    """Hours since the most recent feeding, or ``None`` if none was logged."""

    @property
    def is_known(self) -> bool:
        return self.hours_since_last_feeding is not None


@dataclass(frozen=True)
class SleepContext:
    """Read-only snapshot of the sleep log at analysis time."""

    minutes_since_last_wake: float | None = None
    """Minutes since the baby last woke up, or ``None`` if unknown."""

    @property
    def is_known(self) -> bool:
        return self.minutes_since_last_wake is not None
