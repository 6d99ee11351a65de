"""Single-threaded render context that owns every drawing-surface mutation."""

from __future__ import annotations

import logging
import queue
import threading
import time
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable

LOGGER = logging.getLogger(__name__)

# Sentinel that tells the worker to exit.
_STOP = object()

# Seconds between retries while a blocking put waits for a free slot.
_PUT_POLL_INTERVAL = 0.01


class RenderQueueError(Exception):
    """Base exception for render queue operations."""


class RenderQueueClosedError(RenderQueueError):
    """Job posted after the queue was closed."""


class RenderQueueFullError(RenderQueueError):
    """Job rejected because the queue is at capacity."""


class RenderQueue:
    """
    Bounded FIFO of jobs executed one at a time on a dedicated worker thread.

    Jobs posted from any thread run in the order they were posted. Each post
    returns a Future that resolves with the job's return value or exception.
    Jobs cannot be cancelled once they have started.
    """

    def __init__(self, maxsize: int = 256, *, name: str = "map-render") -> None:
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._closed = False
        self._lock = threading.Lock()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

    @property
    def closed(self) -> bool:
        return self._closed

    def post(self, job: Callable[[], Any]) -> Future:
        """
        Enqueue `job` without blocking.

        Returns: Future for the job's result.
        Raises:
            RenderQueueClosedError: the queue has been closed.
            RenderQueueFullError: the queue is at capacity.
        """
        return self._put(job, block=False)

    def drain(self, timeout: float | None = None) -> bool:
        """
        Wait until every job posted so far has run.

        Returns: True if the queue drained within `timeout` seconds.
        """
        try:
            barrier = self._put(lambda: None, block=True, timeout=timeout)
        except RenderQueueClosedError:
            self._thread.join(timeout)
            return not self._thread.is_alive()
        except RenderQueueFullError:
            return False
        try:
            barrier.result(timeout)
        except FutureTimeoutError:
            return False
        return True

    def close(self, wait: bool = True) -> None:
        """Stop accepting jobs; the worker exits after finishing queued ones."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._queue.put(_STOP)
        if wait:
            self._thread.join()

    def is_render_thread(self) -> bool:
        """True when called from the worker thread."""
        return threading.current_thread() is self._thread

    def _put(
        self,
        job: Callable[[], Any],
        *,
        block: bool,
        timeout: float | None = None,
    ) -> Future:
        # Every put happens under the lock with the queue open, so accepted
        # jobs always sit ahead of _STOP. The lock is never held while waiting.
        future: Future = Future()
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            with self._lock:
                if self._closed:
                    raise RenderQueueClosedError("Render queue is closed")
                try:
                    self._queue.put_nowait((job, future))
                    return future
                except queue.Full:
                    pass
            if not block or (deadline is not None and time.monotonic() >= deadline):
                raise RenderQueueFullError(
                    f"Render queue is full ({self._queue.maxsize} pending jobs)"
                )
            time.sleep(_PUT_POLL_INTERVAL)

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    LOGGER.debug("Render queue stopped")
                    return
                job, future = item
                if not future.set_running_or_notify_cancel():
                    continue
                try:
                    result = job()
                except Exception as exc:
                    future.set_exception(exc)
                else:
                    future.set_result(result)
            finally:
                self._queue.task_done()
