"""Scope: the mutable context bag attached to captured events.

A scope holds tags, extras, user, level, fingerprint and breadcrumbs.
Every mutator notifies the registered listeners, which is how a bound
client mirrors context into its backend.  ``clone`` produces an
independent copy; listeners are not carried over.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any

from capture_hub.core.config import MAX_BREADCRUMBS
from capture_hub.core.enums import Severity
from capture_hub.core.models import Breadcrumb, Event

logger = logging.getLogger(__name__)

ScopeListener = Callable[["Scope"], None]


class Scope:
    """Holds additional event information applied at capture time."""

    def __init__(self) -> None:
        self._listeners: list[ScopeListener] = []
        self._notifying = False

        self._tags: dict[str, str] = {}
        self._extra: dict[str, Any] = {}
        self._user: dict[str, Any] = {}
        self._fingerprint: list[str] = []
        self._level: Severity | None = None
        self._breadcrumbs: list[Breadcrumb] = []

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_scope_listener(self, callback: ScopeListener) -> None:
        """Register a callback invoked after every mutation."""
        self._listeners.append(callback)

    def _notify_scope_listeners(self) -> None:
        # A listener that mutates the scope must not re-enter the loop.
        if self._notifying:
            return
        self._notifying = True
        try:
            for callback in list(self._listeners):
                callback(self)
        finally:
            self._notifying = False

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_user(self, user: dict[str, Any] | None) -> Scope:
        self._user = dict(user or {})
        self._notify_scope_listeners()
        return self

    def set_tag(self, key: str, value: str) -> Scope:
        self._tags[key] = value
        self._notify_scope_listeners()
        return self

    def set_tags(self, tags: dict[str, str]) -> Scope:
        self._tags.update(tags)
        self._notify_scope_listeners()
        return self

    def set_extra(self, key: str, value: Any) -> Scope:
        self._extra[key] = value
        self._notify_scope_listeners()
        return self

    def set_extras(self, extras: dict[str, Any]) -> Scope:
        self._extra.update(extras)
        self._notify_scope_listeners()
        return self

    def set_fingerprint(self, fingerprint: list[str]) -> Scope:
        self._fingerprint = list(fingerprint)
        self._notify_scope_listeners()
        return self

    def set_level(self, level: Severity | None) -> Scope:
        self._level = level
        self._notify_scope_listeners()
        return self

    def add_breadcrumb(
        self,
        breadcrumb: Breadcrumb | dict[str, Any],
        max_breadcrumbs: int = MAX_BREADCRUMBS,
    ) -> Scope:
        """Append a breadcrumb, keeping only the newest ``max_breadcrumbs``."""
        if isinstance(breadcrumb, dict):
            breadcrumb = Breadcrumb(**breadcrumb)
        if max_breadcrumbs <= 0:
            self._breadcrumbs = []
        else:
            self._breadcrumbs = [*self._breadcrumbs, breadcrumb][-max_breadcrumbs:]
        self._notify_scope_listeners()
        return self

    def clear_breadcrumbs(self) -> Scope:
        self._breadcrumbs = []
        self._notify_scope_listeners()
        return self

    def clear(self) -> Scope:
        """Reset all context; listeners stay registered."""
        self._tags = {}
        self._extra = {}
        self._user = {}
        self._fingerprint = []
        self._level = None
        self._breadcrumbs = []
        self._notify_scope_listeners()
        return self

    # ------------------------------------------------------------------
    # Read-only
    # ------------------------------------------------------------------

    @property
    def tags(self) -> dict[str, str]:
        return dict(self._tags)

    @property
    def extra(self) -> dict[str, Any]:
        return dict(self._extra)

    @property
    def user(self) -> dict[str, Any]:
        return dict(self._user)

    @property
    def fingerprint(self) -> list[str]:
        return list(self._fingerprint)

    @property
    def level(self) -> Severity | None:
        return self._level

    @property
    def breadcrumbs(self) -> list[Breadcrumb]:
        return list(self._breadcrumbs)

    # ------------------------------------------------------------------
    # Copy / apply
    # ------------------------------------------------------------------

    @classmethod
    def clone(cls, scope: Scope | None = None) -> Scope:
        """Return a deep copy of ``scope`` (or an empty scope)."""
        new_scope = cls()
        if scope is not None:
            new_scope._tags = dict(scope._tags)
            new_scope._extra = copy.deepcopy(scope._extra)
            new_scope._user = copy.deepcopy(scope._user)
            new_scope._fingerprint = list(scope._fingerprint)
            new_scope._level = scope._level
            new_scope._breadcrumbs = [b.model_copy(deep=True) for b in scope._breadcrumbs]
        return new_scope

    def apply_to_event(
        self, event: Event, max_breadcrumbs: int = MAX_BREADCRUMBS
    ) -> Event:
        """Merge scope data into ``event``.  Event fields win over scope fields."""
        update: dict[str, Any] = {
            "tags": {**self._tags, **event.tags},
            "extra": copy.deepcopy({**self._extra, **event.extra}),
            "user": copy.deepcopy({**self._user, **event.user}),
        }
        if not event.fingerprint and self._fingerprint:
            update["fingerprint"] = list(self._fingerprint)
        if self._level is not None:
            update["level"] = self._level
        if not event.breadcrumbs and self._breadcrumbs and max_breadcrumbs > 0:
            update["breadcrumbs"] = self._breadcrumbs[-max_breadcrumbs:]
        return event.model_copy(update=update)

    def __repr__(self) -> str:
        return (
            f"Scope(tags={len(self._tags)}, extra={len(self._extra)}, "
            f"breadcrumbs={len(self._breadcrumbs)})"
        )
