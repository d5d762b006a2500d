"""HybridClassifier -- acoustic features + feeding/sleep context.

Walks the ordered cascade from :mod:`cry_translator.classifier.rules`
and reports the first rule that matches.  Every result passes through
a single packaging step that also hands it to an optional history
recorder; recorder failures are logged and never affect the result.
"""

from __future__ import annotations

import logging
from typing import Callable

from cry_translator.classifier.rules import (
    CONTEXT_ONLY_CONFIDENCE,
    CONTEXT_ONLY_DESCRIPTION,
    CONTEXT_ONLY_LABEL,
    CryRule,
    Evidence,
    build_rules,
)
from cry_translator.classifier.thresholds import DEFAULT_THRESHOLDS, Thresholds
from cry_translator.models.context import FeedingContext, SleepContext
from cry_translator.models.features import AudioFeatures
from cry_translator.models.result import ClassificationResult, CryLabel

logger = logging.getLogger(__name__)

HistoryRecorder = Callable[[ClassificationResult], None]
"""Fire-and-forget callback that receives every produced result."""


class HybridClassifier:
    """Rule-cascade classifier for cry recordings.

    Usage::

        classifier = HybridClassifier()
        result = classifier.classify(
            features,
            FeedingContext(hours_since_last_feeding=3.0),
            SleepContext(),
        )

    Parameters
    ----------
    thresholds:
        Numeric boundaries for the cascade.  Defaults to the shipped
        calibration.
    recorder:
        Optional callback invoked with each result (e.g.
        ``HistoryDispatcher.submit``).  Must not block.
    """

    def __init__(
        self,
        thresholds: Thresholds = DEFAULT_THRESHOLDS,
        recorder: HistoryRecorder | None = None,
    ) -> None:
        self._thresholds = thresholds
        self._rules = build_rules(thresholds)
        self._recorder = recorder
        logger.info(
            "HybridClassifier initialized with %d rules (history=%s)",
            len(self._rules),
            "enabled" if recorder else "disabled",
        )

    @property
    def thresholds(self) -> Thresholds:
        return self._thresholds

    @property
    def rules(self) -> list[CryRule]:
        """Return a copy of the cascade in evaluation order."""
        return list(self._rules)

    def classify(
        self,
        features: AudioFeatures,
        feeding: FeedingContext | None = None,
        sleep: SleepContext | None = None,
    ) -> ClassificationResult:
        """Classify a recording from its features and context.

        Parameters
        ----------
        features:
            Acoustic features of the recording.
        feeding:
            Feeding snapshot; ``None`` is treated as no feeding record.
        sleep:
            Sleep snapshot; ``None`` is treated as no wake record.

        Returns
        -------
        ClassificationResult
            Result of the first matching rule.
        """
        evidence = Evidence(
            features=features,
            feeding=feeding or FeedingContext(),
            sleep=sleep or SleepContext(),
        )

        for rule in self._rules:
            if rule.matches(evidence):
                logger.debug("Rule '%s' matched %s", rule.name, evidence)
                return self._create_result(
                    rule.label, rule.confidence, rule.description, rule=rule.name
                )

        # The cascade ends with an unconditional rule; reaching here
        # means a custom cascade was built without one.
        raise RuntimeError("Cry rule cascade has no default rule")

    def classify_context_only(self) -> ClassificationResult:
        """Fallback used when the recording could not be analyzed at all."""
        return self._create_result(
            CONTEXT_ONLY_LABEL,
            CONTEXT_ONLY_CONFIDENCE,
            CONTEXT_ONLY_DESCRIPTION,
            is_real_ai=False,
        )

    def _create_result(
        self,
        label: CryLabel,
        confidence: float,
        description: str,
        is_real_ai: bool = True,
        rule: str | None = None,
    ) -> ClassificationResult:
        result = ClassificationResult(
            label=label,
            confidence=confidence,
            description=description,
            is_real_ai=is_real_ai,
            rule=rule,
        )
        if self._recorder is not None:
            try:
                self._recorder(result)
            except Exception:
                logger.warning(
                    "History recording failed; returning result anyway",
                    exc_info=True,
                )
        return result
