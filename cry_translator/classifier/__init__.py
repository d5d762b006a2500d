"""Hybrid cry classifier.

Combines acoustic features with feeding and sleep context through an
ordered rule cascade::

    from cry_translator.classifier import HybridClassifier

    classifier = HybridClassifier()
    result = classifier.classify(features, feeding_ctx, sleep_ctx)
"""

from cry_translator.classifier.hybrid import HistoryRecorder, HybridClassifier
from cry_translator.classifier.rules import CryRule, Evidence, build_rules
from cry_translator.classifier.thresholds import (
    DEFAULT_THRESHOLDS,
    Thresholds,
    parse_thresholds_yaml,
    thresholds_from_dict,
)

__all__ = [
    "CryRule",
    "DEFAULT_THRESHOLDS",
    "Evidence",
    "HistoryRecorder",
    "HybridClassifier",
    "Thresholds",
    "build_rules",
    "parse_thresholds_yaml",
    "thresholds_from_dict",
]
