"""Module-level capture API bound to the current hub.

Thin wrappers for code that has no hub handed to it.  Each call resolves
``get_current_hub()`` at call time.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from capture_hub.core.enums import Severity
from capture_hub.core.models import Breadcrumb, Event
from capture_hub.hub.current import get_current_hub
from capture_hub.scope import Scope

T = TypeVar("T")


def capture_exception(
    exception: BaseException | None = None, hint: dict[str, Any] | None = None
) -> str:
    return get_current_hub().capture_exception(exception, hint)


def capture_message(
    message: str,
    level: Severity | None = None,
    hint: dict[str, Any] | None = None,
) -> str:
    return get_current_hub().capture_message(message, level, hint)


def capture_event(
    event: Event | dict[str, Any], hint: dict[str, Any] | None = None
) -> str:
    return get_current_hub().capture_event(event, hint)


def add_breadcrumb(
    breadcrumb: Breadcrumb | dict[str, Any], hint: dict[str, Any] | None = None
) -> None:
    get_current_hub().add_breadcrumb(breadcrumb, hint)


def configure_scope(callback: Callable[[Scope], None]) -> None:
    get_current_hub().configure_scope(callback)


def with_scope(callback: Callable[[Scope], T]) -> T:
    return get_current_hub().with_scope(callback)


def last_event_id() -> str | None:
    return get_current_hub().last_event_id()
