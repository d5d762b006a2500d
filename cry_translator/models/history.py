"""HistoryEntry dataclass -- one persisted classification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from cry_translator.models.result import ClassificationResult


@dataclass(frozen=True)
class HistoryEntry:
    """A classification result together with the time it was produced."""

    result: ClassificationResult
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        data = self.result.to_dict()
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        return cls(
            result=ClassificationResult.from_dict(data),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )
