"""
Closable queue used to connect the pipeline stages.

Wraps queue.Queue with an explicit end-of-stream marker so that any number
of consumers can iterate until every producer is done.
"""

import logging
import queue
import threading
from typing import Generic, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CLOSED = object()


class QueueClosedError(RuntimeError):
    """Raised when putting into, or closing, a queue that is already closed."""

    pass


class ClosableQueue(Generic[T]):
    """
    Thread-safe FIFO with a "no more items" marker.

    Closing enqueues a single sentinel behind all pending items. A consumer
    that dequeues the sentinel puts it back for the next consumer and stops,
    so every consumer observes the close exactly once.
    """

    def __init__(self, maxsize: int = 0, name: str = "queue"):
        """
        Initialize the queue.

        Args:
            maxsize: Upper bound on buffered items; 0 means unbounded.
                     put() blocks while the queue is full.
            name: Label used in log messages
        """
        self._queue: queue.Queue = queue.Queue(maxsize=max(0, maxsize))
        self._closed = False
        self._lock = threading.Lock()
        self.name = name

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, item: T) -> None:
        """
        Add an item, blocking while the queue is full.

        Raises:
            QueueClosedError: If the queue has been closed
        """
        if self._closed:
            raise QueueClosedError(f"Cannot put into closed {self.name}")
        self._queue.put(item)

    def close(self) -> None:
        """
        Signal that no more items will be added.

        Must be called once, by the side that owns the producers, after
        every put has returned.

        Raises:
            QueueClosedError: If the queue is already closed
        """
        with self._lock:
            if self._closed:
                raise QueueClosedError(f"{self.name} is already closed")
            self._closed = True
        logger.debug(f"Closing {self.name}")
        self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[T]:
        """Yield items until the queue is closed and drained."""
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                # The sentinel is the last item, so there is always room for it
                self._queue.put(_CLOSED)
                return
            yield item
