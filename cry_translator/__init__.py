"""Cry Translator -- on-device baby cry analysis.

Public API re-exports for convenient access::

    from cry_translator import CryAnalysisEngine, HybridClassifier, extract_features
"""

from cry_translator.audio import FeatureExtractor, extract_features
from cry_translator.classifier import HybridClassifier, Thresholds
from cry_translator.context import FeedingTracker, SleepTracker
from cry_translator.engine import CryAnalysisEngine
from cry_translator.errors import AudioDecodeError, CryTranslatorError, HistoryError
from cry_translator.history import HistoryDispatcher, InMemoryHistory, StoreHistory
from cry_translator.models import (
    AudioFeatures,
    ClassificationResult,
    CryLabel,
    FeedingContext,
    HistoryEntry,
    SleepContext,
)

__all__ = [
    # Core engine
    "CryAnalysisEngine",
    # Pipeline stages
    "FeatureExtractor",
    "extract_features",
    "HybridClassifier",
    "Thresholds",
    # Collaborators
    "FeedingTracker",
    "SleepTracker",
    "HistoryDispatcher",
    "InMemoryHistory",
    "StoreHistory",
    # Models
    "AudioFeatures",
    "ClassificationResult",
    "CryLabel",
    "FeedingContext",
    "SleepContext",
    "HistoryEntry",
    # Errors
    "CryTranslatorError",
    "AudioDecodeError",
    "HistoryError",
]
