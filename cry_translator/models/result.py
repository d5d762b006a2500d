"""ClassificationResult dataclass -- output of ``HybridClassifier.classify()``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class CryLabel(str, Enum):
    """The five cry causes the engine can report."""

    HUNGER = "Hunger"
    SLEEPY = "Sleepy"
    DIAPER = "Diaper"
    GAS = "Gas"
    DISCOMFORT = "Discomfort"


@dataclass(frozen=True)
class ClassificationResult:
    """Output of ``HybridClassifier.classify()``.

    Bundles the label, confidence and a short rationale suitable for
    showing to a parent.  ``is_real_ai`` is provenance metadata only:
    it is ``False`` for the context-only fallback and ``True`` for
    everything produced by the rule cascade.
    """

    label: CryLabel
    """Detected cry cause."""

    confidence: float
    """Confidence of the label, 0.0 to 1.0."""

    description: str
    """Human-readable rationale."""

    is_real_ai: bool = True
    """Whether the result came from the feature/context cascade."""

    rule: str | None = None
    """Name of the rule that produced the result, if any."""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable mapping of the result."""
        return {
            "label": self.label.value,
            "confidence": self.confidence,
            "description": self.description,
            "is_real_ai": self.is_real_ai,
            "rule": self.rule,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClassificationResult:
        """Rebuild a result from :meth:`to_dict` output.

        Raises
        ------
        ValueError
            If ``label`` is not one of the known cry labels.
        KeyError
            If a required key is missing.
        """
        return cls(
            label=CryLabel(data["label"]),
            confidence=float(data["confidence"]),
            description=str(data["description"]),
            is_real_ai=bool(data.get("is_real_ai", True)),
            rule=data.get("rule"),
        )
