"""Classification history: sinks and the fire-and-forget dispatcher.

Usage::

    from cry_translator.history import HistoryDispatcher, InMemoryHistory

    dispatcher = HistoryDispatcher(InMemoryHistory())
    dispatcher.submit(result)
"""

from cry_translator.history.base import HistorySink
from cry_translator.history.dispatcher import HistoryDispatcher
from cry_translator.history.sinks import HISTORY_KEY, InMemoryHistory, StoreHistory

__all__ = [
    "HISTORY_KEY",
    "HistoryDispatcher",
    "HistorySink",
    "InMemoryHistory",
    "StoreHistory",
]
