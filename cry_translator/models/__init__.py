"""Cry Translator data models."""

from cry_translator.models.context import FeedingContext, SleepContext
from cry_translator.models.features import DEGRADED_FEATURES, EMPTY_FEATURES, AudioFeatures
from cry_translator.models.history import HistoryEntry
from cry_translator.models.result import ClassificationResult, CryLabel

__all__ = [
    "AudioFeatures",
    "ClassificationResult",
    "CryLabel",
    "DEGRADED_FEATURES",
    "EMPTY_FEATURES",
    "FeedingContext",
    "HistoryEntry",
    "SleepContext",
]
