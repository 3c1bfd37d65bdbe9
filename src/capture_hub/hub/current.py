"""Ambient hub lookup.

Producers normally receive their hub explicitly (integrations get it in
``install``).  Code that cannot be handed one asks ``get_current_hub()``,
which returns the hub activated for the current context with
``use_hub``, or else the process-main hub.

A registered hub older than :data:`API_VERSION` is ignored and replaced
by a fresh one, so a stale hub left behind by an older copy of this
package never receives calls it cannot handle.
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterator
from contextvars import ContextVar

from .hub import API_VERSION, Hub

_main_hub: Hub | None = None

# Hub activated for the current asyncio task / thread context
_current_hub: ContextVar[Hub | None] = ContextVar("current_hub", default=None)


def _is_usable(hub: Hub | None) -> bool:
    return hub is not None and not hub.is_older_than(API_VERSION)


def get_main_hub() -> Hub:
    """Return the process-main hub, creating it on first use."""
    global _main_hub
    if not _is_usable(_main_hub):
        _main_hub = Hub()
    assert _main_hub is not None
    return _main_hub


def make_main(hub: Hub | None) -> Hub | None:
    """Install ``hub`` as the process-main hub and return the previous one."""
    global _main_hub
    previous = _main_hub
    _main_hub = hub
    return previous


def get_current_hub() -> Hub:
    """Return the hub for the current context."""
    hub = _current_hub.get()
    if _is_usable(hub):
        assert hub is not None
        return hub
    return get_main_hub()


@contextlib.contextmanager
def use_hub(hub: Hub) -> Iterator[Hub]:
    """Make ``hub`` the current hub inside the ``with`` block."""
    token = _current_hub.set(hub)
    try:
        yield hub
    finally:
        _current_hub.reset(token)
