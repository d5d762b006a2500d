"""Abstract history sink interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from cry_translator.models.history import HistoryEntry
from cry_translator.models.result import ClassificationResult


class HistorySink(ABC):
    """Append-only log of classification results.

    Implementations return entries most recent first.  ``append()`` is
    called from the dispatcher's worker thread, so implementations
    must be safe to call from a thread other than the one calling
    ``list()``.
    """

    @abstractmethod
    def append(self, result: ClassificationResult, timestamp: datetime) -> None:
        """Persist a result.

        Raises
        ------
        cry_translator.errors.HistoryError
            If the entry cannot be stored.
        """
        ...

    @abstractmethod
    def list(self) -> list[HistoryEntry]:
        """Return stored entries, most recent first."""
        ...

    @abstractmethod
    def clear(self) -> None:
        ...
