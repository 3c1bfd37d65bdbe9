"""In-memory client and backend for testing and local use.

No external dependencies.  Captured events are kept in a list, and the
backend keeps a snapshot of every mirrored scope.
"""

from __future__ import annotations

from capture_hub.core.config import Settings
from capture_hub.core.models import Event
from capture_hub.scope import Scope

from .base import BaseClient


class MemoryBackend:
    """Backend storing a clone of each scope it is handed."""

    def __init__(self) -> None:
        self._scopes: list[Scope] = []

    def store_scope(self, scope: Scope) -> None:
        self._scopes.append(Scope.clone(scope))

    @property
    def stored_scopes(self) -> list[Scope]:
        return list(self._scopes)

    @property
    def latest_scope(self) -> Scope | None:
        return self._scopes[-1] if self._scopes else None


class MemoryClient(BaseClient):
    """Client that records events instead of sending them."""

    def __init__(
        self,
        settings: Settings | None = None,
        backend: MemoryBackend | None = None,
    ) -> None:
        super().__init__(settings, backend if backend is not None else MemoryBackend())
        self._events: list[Event] = []

    async def _send_event(self, event: Event) -> None:
        self._events.append(event)

    # ------------------------------------------------------------------
    # Testing helpers
    # ------------------------------------------------------------------

    @property
    def events(self) -> list[Event]:
        return list(self._events)

    def get_event(self, event_id: str) -> Event | None:
        for event in self._events:
            if event.event_id == event_id:
                return event
        return None

    def clear_events(self) -> None:
        self._events.clear()
