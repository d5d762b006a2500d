"""The ordered rule cascade used by ``HybridClassifier``.

Rules are evaluated top to bottom and the first match wins.  Acoustic
rules come first; context rules only disambiguate when the audio is
inconclusive; the final rule always matches so every input gets a
label.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from cry_translator.classifier.thresholds import DEFAULT_THRESHOLDS, Thresholds
from cry_translator.models.context import FeedingContext, SleepContext
from cry_translator.models.features import AudioFeatures
from cry_translator.models.result import CryLabel


@dataclass(frozen=True)
class Evidence:
    """Everything a rule may look at for one analysis."""

    features: AudioFeatures
    feeding: FeedingContext
    sleep: SleepContext


@dataclass(frozen=True)
class CryRule:
    """A single cascade step.

    Attributes
    ----------
    name:
        Rule identifier, recorded on the result.
    predicate:
        Returns ``True`` when the rule applies to the evidence.
    label:
        Label reported when the rule fires.
    confidence:
        Confidence reported when the rule fires.
    description:
        Rationale shown to the parent.
    """

    name: str
    predicate: Callable[[Evidence], bool]
    label: CryLabel
    confidence: float
    description: str

    def matches(self, evidence: Evidence) -> bool:
        return bool(self.predicate(evidence))


CONTEXT_ONLY_LABEL = CryLabel.DISCOMFORT
CONTEXT_ONLY_CONFIDENCE = 0.7
CONTEXT_ONLY_DESCRIPTION = "Could not process audio clearly. General discomfort suspected."


def build_rules(thresholds: Thresholds = DEFAULT_THRESHOLDS) -> list[CryRule]:
    """Return the cascade in evaluation order for the given thresholds."""
    t = thresholds

    def feeding_hours(ev: Evidence) -> float | None:
        return ev.feeding.hours_since_last_feeding

    def wake_minutes(ev: Evidence) -> float | None:
        return ev.sleep.minutes_since_last_wake

    return [
        # Acoustic signals
        CryRule(
            name="high_pitch",
            predicate=lambda ev: ev.features.pitch > t.high_pitch_hz,
            label=CryLabel.DISCOMFORT,
            confidence=0.9,
            description=(
                "High-pitched cry detected. Check for physical discomfort, "
                "temperature, or tight clothing."
            ),
        ),
        CryRule(
            name="loud_rhythmic",
            predicate=lambda ev: ev.features.volume > t.loud_volume and ev.features.is_rhythmic,
            label=CryLabel.HUNGER,
            confidence=0.85,
            description="Rhythmic, loud demand cry detected. Likely hungry.",
        ),
        CryRule(
            name="soft_whimper",
            predicate=lambda ev: ev.features.volume < t.soft_volume and not ev.features.is_rhythmic,
            label=CryLabel.SLEEPY,
            confidence=0.8,
            description="Soft, whimpering sounds detected. Baby seems tired.",
        ),
        # Context
        CryRule(
            name="overdue_feeding",
            predicate=lambda ev: (
                feeding_hours(ev) is not None
                and feeding_hours(ev) > t.overdue_feeding_hours
            ),
            label=CryLabel.HUNGER,
            confidence=0.88,
            description=(
                f"It has been over {t.overdue_feeding_hours:g} hours since last feed. "
                "Strong likelihood of hunger."
            ),
        ),
        CryRule(
            name="recent_feeding",
            predicate=lambda ev: (
                feeding_hours(ev) is not None
                and feeding_hours(ev) < t.recent_feeding_hours
            ),
            label=CryLabel.GAS,
            confidence=0.82,
            description="Fed recently. Sharp or grunt-like sounds may indicate trapped gas.",
        ),
        CryRule(
            name="wake_window",
            predicate=lambda ev: (
                wake_minutes(ev) is not None
                and t.wake_window_min_minutes <= wake_minutes(ev) < t.wake_window_max_minutes
            ),
            label=CryLabel.SLEEPY,
            confidence=0.85,
            description="Approaching end of wake window. Fussiness likely due to tiredness.",
        ),
        # Default
        CryRule(
            name="default",
            predicate=lambda ev: True,
            label=CryLabel.DIAPER,
            confidence=0.75,
            description="No specific distress pattern. Check diaper or try changing position.",
        ),
    ]
