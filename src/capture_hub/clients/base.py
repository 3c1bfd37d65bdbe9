"""BaseClient ABC providing the shared event-building pipeline.

All clients in the package extend BaseClient, which provides:

- event construction for exceptions and messages
- scope application (tags, extras, user, level, breadcrumbs)
- environment/release stamping from :class:`Settings`
- synchronous breadcrumb recording bounded by ``max_breadcrumbs``
- an optional backend for scope mirroring

Subclasses must implement:
- ``_send_event()`` coroutine, which hands the finished event to
  whatever consumes it (a transport, a log, a list).

The ``capture_*`` methods build and scope the event when called and
return a coroutine that only delivers it, so context set after a capture
call never leaks into that event.
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Coroutine
from typing import Any

from capture_hub.core.config import Settings
from capture_hub.core.enums import Severity
from capture_hub.core.interfaces import IBackend
from capture_hub.core.models import Breadcrumb, Event, ExceptionInfo
from capture_hub.hub.hub import EVENT_ID_HINT_KEY
from capture_hub.scope import Scope

logger = logging.getLogger(__name__)


class BaseClient(abc.ABC):
    """Abstract base for capture clients.

    Parameters
    ----------
    settings:
        SDK settings.  Defaults are used if omitted.
    backend:
        Optional backend receiving mirrored scopes from the hub.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        backend: IBackend | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._backend = backend

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_backend(self) -> IBackend | None:
        return self._backend

    # ------------------------------------------------------------------
    # Client contract
    # ------------------------------------------------------------------

    def capture_exception(
        self,
        exception: BaseException | None,
        hint: dict[str, Any],
        scope: Scope | None,
    ) -> Coroutine[Any, Any, str]:
        if exception is None:
            event = Event(
                level=Severity.ERROR,
                message="capture_exception called without an exception",
            )
        else:
            event = Event(
                level=Severity.ERROR,
                message=str(exception) or type(exception).__name__,
                exception=ExceptionInfo.from_exception(exception),
            )
        return self._process_event(event, hint, scope)

    def capture_message(
        self,
        message: str,
        level: Severity | None,
        hint: dict[str, Any],
        scope: Scope | None,
    ) -> Coroutine[Any, Any, str]:
        event = Event(message=message, level=level or Severity.INFO)
        return self._process_event(event, hint, scope)

    def capture_event(
        self,
        event: Event | dict[str, Any],
        hint: dict[str, Any],
        scope: Scope | None,
    ) -> Coroutine[Any, Any, str]:
        if isinstance(event, dict):
            event = Event(**event)
        return self._process_event(event, hint, scope)

    def add_breadcrumb(
        self,
        breadcrumb: Breadcrumb | dict[str, Any],
        hint: dict[str, Any],
        scope: Scope | None,
    ) -> None:
        if scope is None or self._settings.max_breadcrumbs <= 0:
            return
        scope.add_breadcrumb(breadcrumb, self._settings.max_breadcrumbs)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def prepare_event(
        self, event: Event, hint: dict[str, Any], scope: Scope | None
    ) -> Event:
        """Stamp IDs and settings onto ``event`` and apply ``scope``."""
        update: dict[str, Any] = {}
        if hint.get(EVENT_ID_HINT_KEY):
            update["event_id"] = hint[EVENT_ID_HINT_KEY]
        if event.environment is None and self._settings.environment:
            update["environment"] = self._settings.environment
        if event.release is None and self._settings.release:
            update["release"] = self._settings.release
        prepared = event.model_copy(update=update)
        if scope is not None:
            prepared = scope.apply_to_event(prepared, self._settings.max_breadcrumbs)
        return prepared

    def _process_event(
        self, event: Event, hint: dict[str, Any], scope: Scope | None
    ) -> Coroutine[Any, Any, str]:
        # The scope is read now; only delivery is deferred.
        return self._deliver(self.prepare_event(event, hint, scope))

    async def _deliver(self, prepared: Event) -> str:
        await self._send_event(prepared)
        if self._settings.debug:
            logger.debug("Event %s handed off", prepared.event_id)
        return prepared.event_id

    @abc.abstractmethod
    async def _send_event(self, event: Event) -> None:
        """Hand a finished event to its consumer."""
