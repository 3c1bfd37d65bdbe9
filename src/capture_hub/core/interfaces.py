"""Protocol interfaces for the capture hub.

The hub forwards to whatever implements ``IClient``; the reference
clients in ``capture_hub.clients`` and any transport-backed client are
interchangeable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .enums import Severity
from .models import Breadcrumb, Event

if TYPE_CHECKING:
    from capture_hub.scope import Scope


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

@runtime_checkable
class IBackend(Protocol):
    """Storage side of a client, receiving mirrored scopes."""

    def store_scope(self, scope: "Scope") -> None: ...


@runtime_checkable
class IClient(Protocol):
    """Capture-handling client bound to a hub layer.

    The three capture methods may return a coroutine, a future or a plain
    value; the hub never waits for them.  ``add_breadcrumb`` must finish
    its work before returning.
    """

    def capture_exception(
        self,
        exception: BaseException | None,
        hint: dict[str, Any],
        scope: "Scope | None",
    ) -> Any: ...

    def capture_message(
        self,
        message: str,
        level: Severity | None,
        hint: dict[str, Any],
        scope: "Scope | None",
    ) -> Any: ...

    def capture_event(
        self,
        event: Event,
        hint: dict[str, Any],
        scope: "Scope | None",
    ) -> Any: ...

    def add_breadcrumb(
        self,
        breadcrumb: Breadcrumb | dict[str, Any],
        hint: dict[str, Any],
        scope: "Scope | None",
    ) -> None: ...


@runtime_checkable
class IBackendClient(IClient, Protocol):
    """Client that exposes a backend for scope mirroring."""

    def get_backend(self) -> IBackend: ...
