"""CryAnalysisEngine -- main orchestrator.

Wires feature extraction, context lookup, the hybrid classifier and
history dispatch into a single ``analyze()`` call that never raises:

1. Extract ``AudioFeatures`` from the recording bytes
2. Snapshot feeding and sleep context from the injected providers
3. Run the rule cascade
4. Hand the result to the history dispatcher (fire-and-forget)

If feature extraction raises, the engine skips steps 2-3 and returns
the context-only fallback instead.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

from cry_translator.audio.features import FeatureExtractor
from cry_translator.classifier.hybrid import HybridClassifier
from cry_translator.classifier.thresholds import (
    DEFAULT_THRESHOLDS,
    Thresholds,
    parse_thresholds_yaml,
)
from cry_translator.context.base import FeedingContextProvider, SleepContextProvider
from cry_translator.history.base import HistorySink
from cry_translator.history.dispatcher import HistoryDispatcher
from cry_translator.models.context import FeedingContext, SleepContext
from cry_translator.models.features import AudioFeatures
from cry_translator.models.history import HistoryEntry
from cry_translator.models.result import ClassificationResult

logger = logging.getLogger(__name__)


class Extractor(Protocol):
    def extract(self, data: bytes) -> AudioFeatures: ...


class CryAnalysisEngine:
    """On-device cry analysis pipeline.

    All collaborators are injected; the engine holds no global state.

    Parameters
    ----------
    history:
        Sink receiving every result.  ``None`` disables history.
    feeding:
        Feeding context provider.  ``None`` means no feeding context.
    sleep:
        Sleep context provider.  ``None`` means no sleep context.
    thresholds:
        ``Thresholds`` instance or path to a YAML thresholds file.
    think_delay:
        Seconds to wait before returning a cascade result.  Purely
        cosmetic; defaults to no delay.
    extractor:
        Feature extractor.  Defaults to :class:`FeatureExtractor`.
    """

    def __init__(
        self,
        history: HistorySink | None = None,
        feeding: FeedingContextProvider | None = None,
        sleep: SleepContextProvider | None = None,
        thresholds: Thresholds | str | Path | None = None,
        think_delay: float = 0.0,
        extractor: Extractor | None = None,
    ) -> None:
        if thresholds is None:
            thresholds = DEFAULT_THRESHOLDS
        elif not isinstance(thresholds, Thresholds):
            thresholds = parse_thresholds_yaml(thresholds)

        self._history = history
        self._dispatcher: HistoryDispatcher | None = None
        if history is not None:
            self._dispatcher = HistoryDispatcher(history)

        self._feeding = feeding
        self._sleep = sleep
        self._think_delay = think_delay
        self._extractor: Extractor = extractor or FeatureExtractor()
        self._classifier = HybridClassifier(
            thresholds=thresholds,
            recorder=self._dispatcher.submit if self._dispatcher else None,
        )

        logger.info(
            "CryAnalysisEngine initialized (history=%s, feeding=%s, sleep=%s)",
            "enabled" if history else "disabled",
            "enabled" if feeding else "disabled",
            "enabled" if sleep else "disabled",
        )

    @property
    def classifier(self) -> HybridClassifier:
        return self._classifier

    @property
    def dispatcher(self) -> HistoryDispatcher | None:
        return self._dispatcher

    def feeding_context(self) -> FeedingContext:
        """Snapshot the feeding provider; failures count as no record."""
        if self._feeding is None:
            return FeedingContext()
        try:
            return FeedingContext(hours_since_last_feeding=self._feeding.last_feeding_hours_ago())
        except Exception:
            logger.warning("Feeding context lookup failed; ignoring", exc_info=True)
            return FeedingContext()

    def sleep_context(self) -> SleepContext:
        """Snapshot the sleep provider; failures count as no record."""
        if self._sleep is None:
            return SleepContext()
        try:
            return SleepContext(minutes_since_last_wake=self._sleep.last_wake_minutes_ago())
        except Exception:
            logger.warning("Sleep context lookup failed; ignoring", exc_info=True)
            return SleepContext()

    def _snapshot_context(self) -> tuple[FeedingContext, SleepContext]:
        return self.feeding_context(), self.sleep_context()

    async def analyze(self, audio: bytes) -> ClassificationResult:
        """Analyze a recording and return a classification.

        Parameters
        ----------
        audio:
            Raw recording bytes (44-byte header + 16-bit LE PCM).

        Returns
        -------
        ClassificationResult
            Always a valid result; processing faults fall back to the
            context-only classification.
        """
        logger.debug("Starting on-device analysis")
        try:
            features = await asyncio.to_thread(self._extractor.extract, audio)
        except Exception:
            logger.error(
                "Feature extraction failed; falling back to context-only analysis",
                exc_info=True,
            )
            return self._classifier.classify_context_only()

        logger.debug("Audio features: %s", features)
        feeding, sleep = await asyncio.to_thread(self._snapshot_context)
        result = self._classifier.classify(features, feeding, sleep)

        if self._think_delay > 0:
            await asyncio.sleep(self._think_delay)

        logger.info(
            "Cry classified as %s (confidence=%.2f, rule=%s)",
            result.label.value,
            result.confidence,
            result.rule,
        )
        return result

    async def analyze_file(self, path: str | Path) -> ClassificationResult:
        """Read a recording from disk and analyze it.

        Unreadable files and invalid paths take the context-only fallback.
        """
        try:
            audio = await asyncio.to_thread(Path(path).read_bytes)
        except (OSError, TypeError, ValueError):
            logger.error("Could not read recording '%s'", path, exc_info=True)
            return self._classifier.classify_context_only()
        return await self.analyze(audio)

    def get_history(self) -> list[HistoryEntry]:
        """Return recorded results, most recent first.

        Waits for pending history writes first so a result returned by
        ``analyze()`` is visible here.
        """
        if self._history is None or self._dispatcher is None:
            return []
        self._dispatcher.flush()
        return self._history.list()

    def clear_history(self) -> None:
        if self._history is None or self._dispatcher is None:
            return
        self._dispatcher.flush()
        self._history.clear()

    def close(self) -> None:
        """Deliver pending history writes and stop the dispatcher."""
        if self._dispatcher is not None:
            self._dispatcher.close()

    # -- Synchronous convenience wrappers --

    def analyze_sync(self, audio: bytes) -> ClassificationResult:
        """Synchronous wrapper for :meth:`analyze`."""
        return asyncio.run(self.analyze(audio))

    def analyze_file_sync(self, path: str | Path) -> ClassificationResult:
        """Synchronous wrapper for :meth:`analyze_file`."""
        return asyncio.run(self.analyze_file(path))
