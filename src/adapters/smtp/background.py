"""
Background notifier - Dispatches messages off the request thread.

Wraps another Notifier and hands each send to a thread pool, so a slow or
unreachable mail relay never delays the flow that issued the code.
Failures are logged; they are never reported back to the flow.

At most ``max_pending`` messages may be queued or in flight. Beyond that
``send`` raises NotifierQueueFull, which the flow's best-effort dispatch
logs; the user can request a new code.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from src.domain.ports import Notifier

logger = logging.getLogger(__name__)


class NotifierQueueFull(RuntimeError):
    """Raised when the pending-message bound is reached."""


class BackgroundNotifier:
    """
    Implements Notifier protocol by delegating to a worker pool.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, inner: Notifier, max_workers: int = 4, max_pending: int = 1000) -> None:
        self._inner = inner
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notifier")
        self._slots = threading.BoundedSemaphore(max_pending)

    def send(self, to_address: str, subject: str, body: str) -> Future:
        if not self._slots.acquire(blocking=False):
            raise NotifierQueueFull(f"Dropping {subject!r} to {to_address}: delivery queue full")
        try:
            future = self._executor.submit(self._inner.send, to_address, subject, body)
        except RuntimeError:
            self._slots.release()
            raise
        future.add_done_callback(lambda f: self._finish(f, to_address, subject))
        return future

    def _finish(self, future: Future, to_address: str, subject: str) -> None:
        self._slots.release()
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error("Delivery of %r to %s failed", subject, to_address, exc_info=error)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
