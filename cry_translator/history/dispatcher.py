"""HistoryDispatcher -- fire-and-forget delivery of results to a sink.

``submit()`` only timestamps the result and puts it on an unbounded
queue.  A daemon worker thread drains the queue into the sink, so a
slow or failing sink can never delay or break classification.
"""

from __future__ import annotations

import logging
import queue
import threading
from datetime import datetime, timezone
from typing import Callable

from cry_translator.history.base import HistorySink
from cry_translator.models.result import ClassificationResult

logger = logging.getLogger(__name__)

_STOP = object()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HistoryDispatcher:
    """Asynchronous one-way channel from the classifier to a history sink.

    Parameters
    ----------
    sink:
        Destination for results.
    clock:
        Returns the timestamp recorded with each result.
    """

    def __init__(
        self,
        sink: HistorySink,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._sink = sink
        self._clock = clock
        self._queue: queue.Queue[object] = queue.Queue()
        self._closed = False
        self._worker = threading.Thread(
            target=self._run, name="cry-history-dispatcher", daemon=True
        )
        self._worker.start()

    @property
    def sink(self) -> HistorySink:
        return self._sink

    def submit(self, result: ClassificationResult) -> None:
        """Queue a result for the sink without waiting for it."""
        if self._closed:
            logger.warning("History dispatcher is closed; dropping %s result", result.label.value)
            return
        self._queue.put((result, self._clock()))

    def flush(self) -> None:
        """Block until every submitted result has reached the sink."""
        self._queue.join()

    def close(self) -> None:
        """Deliver pending results and stop the worker thread."""
        if self._closed:
            return
        self._closed = True
        self._queue.put(_STOP)
        self._worker.join()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                result, timestamp = item  # type: ignore[misc]
                try:
                    self._sink.append(result, timestamp)
                except Exception:
                    logger.error("Failed to append cry history entry", exc_info=True)
            finally:
                self._queue.task_done()
