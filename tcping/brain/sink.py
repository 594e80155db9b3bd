# tcping/brain/sink.py
import queue
import threading
from typing import Optional

from tcping.schemas import Outcome


class SinkClosedError(RuntimeError):
    """An outcome was sent after the consumer stopped listening."""


class ResultSink:
    """
    Many prober threads put, one consumer gets. FIFO, so a single producer's
    outcomes arrive in the order they were sent. maxsize=0 is unbounded;
    otherwise put() blocks until the consumer catches up.
    """

    def __init__(self, maxsize: int = 0):
        self._queue: "queue.Queue[Outcome]" = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def put(self, outcome: Outcome) -> None:
        # Re-check while blocked on a full queue so a close() can't strand a producer.
        while True:
            if self._closed.is_set():
                raise SinkClosedError(
                    f"sink closed, dropping {outcome.target}#{outcome.sequence}"
                )
            try:
                self._queue.put(outcome, timeout=0.1)
                return
            except queue.Full:
                continue

    def get(self, timeout: Optional[float] = None) -> Outcome:
        """Raises queue.Empty when nothing arrives within timeout."""
        return self._queue.get(timeout=timeout)

    def close(self) -> None:
        self._closed.set()

    def __len__(self) -> int:
        return self._queue.qsize()
