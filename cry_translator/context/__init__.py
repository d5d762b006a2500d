"""Feeding and sleep context providers.

The engine only depends on the two provider interfaces; the trackers
are ready-made implementations backed by a key-value store.
"""

from cry_translator.context.base import FeedingContextProvider, SleepContextProvider
from cry_translator.context.feeding import FeedingLog, FeedingTracker, FeedingType
from cry_translator.context.sleep import SleepLog, SleepStatus, SleepTracker, SleepType

__all__ = [
    "FeedingContextProvider",
    "FeedingLog",
    "FeedingTracker",
    "FeedingType",
    "SleepContextProvider",
    "SleepLog",
    "SleepStatus",
    "SleepTracker",
    "SleepType",
]
