"""Fire-and-forget dispatch of client calls.

The hub hands every asynchronous client call to an ``AsyncDispatcher``.
The dispatcher schedules the returned awaitable without waiting for it
and routes any failure to a diagnostic sink: an error log record plus an
optional ``on_dispatch_error`` callback.  Failures never reach the
producer that made the capture call.

Inside a running event loop a coroutine becomes a task on that loop.
Without one, it is submitted to a background loop that the dispatcher
starts on first use in a daemon thread, so synchronous callers get the
event ID back immediately as well.  Synchronous code waits for
outstanding calls with :meth:`AsyncDispatcher.wait`.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import functools
import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

DispatchErrorCallback = Callable[[str, str, BaseException], None]


class AsyncDispatcher:
    """Schedules client calls and observes them only for failure.

    Parameters
    ----------
    on_dispatch_error:
        Optional callback ``(method, event_id, exc)`` invoked after the
        failure has been logged.  Useful for external metrics.
    """

    def __init__(
        self, on_dispatch_error: DispatchErrorCallback | None = None
    ) -> None:
        self._on_dispatch_error = on_dispatch_error
        # Strong references so running tasks are not garbage collected.
        self._pending: set[asyncio.Future] = set()
        # Calls completing on another thread; guarded by _cond.
        self._threaded: set[concurrent.futures.Future] = set()
        self._cond = threading.Condition()
        self._failures = 0
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None

    def dispatch(
        self,
        method: str,
        event_id: str,
        fn: Callable[..., Any],
        *args: Any,
    ) -> None:
        """Call ``fn(*args)`` and detach from whatever it returns."""
        try:
            result = fn(*args)
        except Exception as exc:
            self._report(method, event_id, exc)
            return

        if asyncio.iscoroutine(result) or asyncio.isfuture(result):
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                self._run_without_loop(method, event_id, result)
                return
            task = asyncio.ensure_future(result)
            self._pending.add(task)
            task.add_done_callback(
                functools.partial(self._on_task_done, method, event_id)
            )
        elif isinstance(result, concurrent.futures.Future):
            self._track_threaded(method, event_id, result)

    async def flush(self) -> None:
        """Wait until every scheduled client call has finished."""
        while self._pending or self._threaded:
            if self._pending:
                await asyncio.gather(*list(self._pending), return_exceptions=True)
            if self._threaded:
                await asyncio.to_thread(self.wait)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until calls running off the caller's loop have finished.

        Covers coroutines submitted to the background loop and
        ``concurrent.futures`` results.  Tasks on a running loop are
        awaited with :meth:`flush` instead.  Returns ``False`` if
        ``timeout`` seconds pass first.
        """
        with self._cond:
            return self._cond.wait_for(lambda: not self._threaded, timeout)

    @property
    def pending(self) -> int:
        """Number of client calls still running."""
        with self._cond:
            return len(self._pending) + len(self._threaded)

    @property
    def failures(self) -> int:
        """Total client calls that ended in failure."""
        return self._failures

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run_without_loop(self, method: str, event_id: str, awaitable: Any) -> None:
        if asyncio.isfuture(awaitable):
            # Bound to a loop that is not running; nothing here can await it.
            awaitable.add_done_callback(
                functools.partial(self._on_task_done, method, event_id)
            )
            return
        try:
            future = asyncio.run_coroutine_threadsafe(
                awaitable, self._background_loop()
            )
        except Exception as exc:
            awaitable.close()
            self._report(method, event_id, exc)
            return
        self._track_threaded(method, event_id, future)

    def _background_loop(self) -> asyncio.AbstractEventLoop:
        with self._cond:
            if self._loop is None or self._loop.is_closed():
                loop = asyncio.new_event_loop()
                thread = threading.Thread(
                    target=loop.run_forever,
                    name="capture-hub-dispatch",
                    daemon=True,
                )
                thread.start()
                self._loop, self._thread = loop, thread
            return self._loop

    def _track_threaded(
        self, method: str, event_id: str, future: concurrent.futures.Future
    ) -> None:
        with self._cond:
            self._threaded.add(future)
        future.add_done_callback(
            functools.partial(self._on_threaded_done, method, event_id)
        )

    def _on_task_done(self, method: str, event_id: str, future: Any) -> None:
        self._pending.discard(future)
        self._observe(method, event_id, future)

    def _on_threaded_done(self, method: str, event_id: str, future: Any) -> None:
        try:
            self._observe(method, event_id, future)
        finally:
            with self._cond:
                self._threaded.discard(future)
                self._cond.notify_all()

    def _observe(self, method: str, event_id: str, future: Any) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            self._report(method, event_id, exc)

    def _report(self, method: str, event_id: str, exc: BaseException) -> None:
        with self._cond:
            self._failures += 1
        logger.error(
            "Client %s failed for event_id=%s",
            method,
            event_id,
            exc_info=exc,
        )
        if self._on_dispatch_error is not None:
            try:
                self._on_dispatch_error(method, event_id, exc)
            except Exception:
                logger.warning("on_dispatch_error callback failed", exc_info=True)
