"""Cry Translator error hierarchy.

Every engine-specific exception inherits from ``CryTranslatorError``
so callers can catch a single base class while still handling
specific error types when needed.

Most of these never reach the caller of
``CryAnalysisEngine.analyze()`` -- the engine absorbs them and
returns a lower-confidence result instead.
"""

from __future__ import annotations


class CryTranslatorError(Exception):
    """Base exception for all Cry Translator errors."""


class AudioDecodeError(CryTranslatorError):
    """Raised when a recording cannot be decoded into PCM samples."""


class HistoryError(CryTranslatorError):
    """Raised when a history sink fails to persist an entry."""
