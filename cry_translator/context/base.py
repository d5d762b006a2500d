"""Context provider interfaces consumed by the engine."""

from __future__ import annotations

from abc import ABC, abstractmethod


class FeedingContextProvider(ABC):
    """Source of the time elapsed since the last feeding."""

    @abstractmethod
    def last_feeding_hours_ago(self) -> float | None:
        """Return hours since the most recent feeding, or ``None`` if none is logged."""
        ...


class SleepContextProvider(ABC):
    """Source of the time elapsed since the baby last woke up."""

    @abstractmethod
    def last_wake_minutes_ago(self) -> float | None:
        """Return minutes since the most recent wake-up, or ``None`` if unknown."""
        ...
