"""Hub: the context stack and capture dispatcher.

The hub owns an ordered stack of :class:`Layer` objects.  The last layer
is the active one: its client receives every capture call and its scope
is the context attached to it.  ``push_scope`` / ``pop_scope`` isolate
context mutations to nested operation boundaries; the base layer created
by the constructor is never removed.

Capture calls never raise into the caller.  Asynchronous client calls are
detached through :class:`AsyncDispatcher`, which logs failures; without a
running event loop they run on the dispatcher's background loop.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from capture_hub.core.enums import Severity
from capture_hub.core.ids import new_event_id
from capture_hub.core.interfaces import IClient
from capture_hub.core.models import Breadcrumb, Event
from capture_hub.scope import Scope

from .dispatch import AsyncDispatcher, DispatchErrorCallback
from .layer import Layer

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Only increase when the hub's public interface gains methods.
API_VERSION = 3

EVENT_ID_HINT_KEY = "event_id"


class Hub:
    """Owns the layer stack and routes captures to the top client.

    Parameters
    ----------
    client:
        Client bound to the base layer.  May be ``None``.
    scope:
        Scope of the base layer.  A fresh empty scope if omitted.
    version:
        API version of this hub; higher means newer.
    on_dispatch_error:
        Optional ``(method, event_id, exc)`` callback for failed
        asynchronous client calls.  Failures are always logged.
    """

    def __init__(
        self,
        client: IClient | None = None,
        scope: Scope | None = None,
        version: int = API_VERSION,
        on_dispatch_error: DispatchErrorCallback | None = None,
    ) -> None:
        self._stack: list[Layer] = []
        self._last_event_id: str | None = None
        self._version = version
        self._dispatcher = AsyncDispatcher(on_dispatch_error=on_dispatch_error)

        self._stack.append(Layer(scope=scope if scope is not None else Scope()))
        if client is not None:
            self.bind_client(client)

    @property
    def version(self) -> int:
        return self._version

    @property
    def dispatcher(self) -> AsyncDispatcher:
        return self._dispatcher

    def is_older_than(self, version: int) -> bool:
        """True if ``version`` is newer than this hub's version."""
        return self._version < version

    # ------------------------------------------------------------------
    # Client binding
    # ------------------------------------------------------------------

    def bind_client(self, client: IClient | None) -> None:
        """Bind ``client`` to the top layer only.

        A bound client gets every later mutation of the top scope mirrored
        into its backend, when it has one.  Mirroring is best effort.
        """
        top = self.get_stack_top()
        top.client = client
        if client is None:
            return

        def _store_scope(scope: Scope) -> None:
            get_backend = getattr(client, "get_backend", None)
            if get_backend is None:
                return
            with contextlib.suppress(Exception):
                get_backend().store_scope(scope)

        top.scope.add_scope_listener(_store_scope)

    # ------------------------------------------------------------------
    # Scope stack
    # ------------------------------------------------------------------

    def push_scope(self) -> Scope:
        """Layer a clone of the current scope on top of the stack.

        Everything set on the returned scope is discarded by the matching
        :meth:`pop_scope`.  Always pair the two, or use :meth:`with_scope`.
        """
        parent = self._stack[-1].scope if self._stack else None
        scope = Scope.clone(parent)
        self._stack.append(Layer(scope=scope, client=self.get_client()))
        return scope

    def pop_scope(self) -> bool:
        """Remove the top layer.

        Returns ``False`` without touching the stack when only the base
        layer is left.
        """
        if len(self._stack) <= 1:
            logger.debug("pop_scope called on the base layer; ignoring")
            return False
        self._stack.pop()
        return True

    @contextlib.contextmanager
    def scope(self) -> Iterator[Scope]:
        """Context manager form of :meth:`with_scope`."""
        scope = self.push_scope()
        try:
            yield scope
        finally:
            self.pop_scope()

    def with_scope(self, callback: Callable[[Scope], T]) -> T:
        """Run ``callback`` inside a freshly pushed scope.

        The scope is popped on every exit path; exceptions from the
        callback propagate after the pop.
        """
        with self.scope() as scope:
            return callback(scope)

    def configure_scope(self, callback: Callable[[Scope], None]) -> None:
        """Call ``callback`` with the top scope if a client is bound.

        Skipped entirely when the top layer has no client.
        """
        top = self.get_stack_top()
        if top.scope is not None and top.client is not None:
            callback(top.scope)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_client(self) -> IClient | None:
        return self.get_stack_top().client

    def get_scope(self) -> Scope:
        return self.get_stack_top().scope

    def get_stack(self) -> list[Layer]:
        return self._stack

    def get_stack_top(self) -> Layer:
        assert self._stack, "hub stack must never be empty"
        return self._stack[-1]

    def last_event_id(self) -> str | None:
        """ID of the most recent capture, or ``None`` before the first."""
        return self._last_event_id

    # ------------------------------------------------------------------
    # Capture
    # ------------------------------------------------------------------

    def capture_exception(
        self,
        exception: BaseException | None = None,
        hint: dict[str, Any] | None = None,
    ) -> str:
        """Capture an exception; ``None`` means the one being handled.

        Returns the generated event ID immediately.
        """
        if exception is None:
            exception = sys.exc_info()[1]
        event_id = self._new_event_id()
        self._invoke_client_async(
            "capture_exception", event_id, exception, self._hint(hint, event_id)
        )
        return event_id

    def capture_message(
        self,
        message: str,
        level: Severity | None = None,
        hint: dict[str, Any] | None = None,
    ) -> str:
        """Capture a plain message; ``level`` is passed through as given."""
        event_id = self._new_event_id()
        self._invoke_client_async(
            "capture_message", event_id, message, level, self._hint(hint, event_id)
        )
        return event_id

    def capture_event(
        self,
        event: Event | dict[str, Any],
        hint: dict[str, Any] | None = None,
    ) -> str:
        """Capture a pre-built event."""
        event_id = self._new_event_id()
        self._invoke_client_async(
            "capture_event", event_id, event, self._hint(hint, event_id)
        )
        return event_id

    def add_breadcrumb(
        self,
        breadcrumb: Breadcrumb | dict[str, Any],
        hint: dict[str, Any] | None = None,
    ) -> None:
        """Record a breadcrumb synchronously on the top layer's client.

        The breadcrumb is on the scope by the time this returns, so the
        next capture call sees it.
        """
        top = self.get_stack_top()
        method = getattr(top.client, "add_breadcrumb", None)
        if method is None:
            return
        try:
            method(breadcrumb, dict(hint or {}), top.scope)
        except Exception:
            logger.error("Client add_breadcrumb failed", exc_info=True)

    async def flush(self) -> None:
        """Wait for all detached client calls to finish."""
        await self._dispatcher.flush()

    def flush_sync(self, timeout: float | None = None) -> bool:
        """Block until client calls running off-loop have finished.

        For synchronous callers.  Returns ``False`` on timeout.
        """
        return self._dispatcher.wait(timeout)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _new_event_id(self) -> str:
        self._last_event_id = new_event_id()
        return self._last_event_id

    @staticmethod
    def _hint(hint: dict[str, Any] | None, event_id: str) -> dict[str, Any]:
        return {**(hint or {}), EVENT_ID_HINT_KEY: event_id}

    def _invoke_client_async(self, method: str, event_id: str, *args: Any) -> None:
        top = self.get_stack_top()
        fn = getattr(top.client, method, None)
        if fn is None:
            return
        self._dispatcher.dispatch(method, event_id, fn, *args, top.scope)

    def __repr__(self) -> str:
        return f"Hub(version={self._version}, depth={len(self._stack)})"
