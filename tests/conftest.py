"""Shared fixtures for the capture-hub test suite."""

from __future__ import annotations

from typing import Any

import pytest

from capture_hub.clients.memory import MemoryClient
from capture_hub.core.config import Settings
from capture_hub.hub import current
from capture_hub.hub.hub import Hub
from capture_hub.integrations.base import reset_installed_integrations
from capture_hub.integrations.platform import ReportingPlatform
from capture_hub.scope import Scope


class RecordingClient:
    """Client double recording every call with a snapshot of the scope."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any], Scope]] = []

    def _record(
        self,
        method: str,
        args: tuple[Any, ...],
        hint: dict[str, Any],
        scope: Scope,
    ) -> None:
        self.calls.append((method, args, hint, Scope.clone(scope)))

    def capture_exception(self, exception, hint, scope):
        self._record("capture_exception", (exception,), hint, scope)

    def capture_message(self, message, level, hint, scope):
        self._record("capture_message", (message, level), hint, scope)

    def capture_event(self, event, hint, scope):
        self._record("capture_event", (event,), hint, scope)

    def add_breadcrumb(self, breadcrumb, hint, scope):
        scope.add_breadcrumb(breadcrumb)
        self._record("add_breadcrumb", (breadcrumb,), hint, scope)

    def methods(self) -> list[str]:
        return [c[0] for c in self.calls]


# ---------------------------------------------------------------------------
# Global state
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolate_globals():
    """Reset the main hub and integration install history per test."""
    previous = current.make_main(None)
    reset_installed_integrations()
    yield
    current.make_main(previous)
    reset_installed_integrations()


# ---------------------------------------------------------------------------
# Hubs and clients
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", release="1.0.0")


@pytest.fixture
def memory_client(settings) -> MemoryClient:
    return MemoryClient(settings)


@pytest.fixture
def recording_client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def hub() -> Hub:
    """Hub with no client bound."""
    return Hub()


@pytest.fixture
def memory_hub(memory_client) -> Hub:
    return Hub(client=memory_client)


@pytest.fixture
def recording_hub(recording_client) -> Hub:
    return Hub(client=recording_client)


@pytest.fixture
def platform() -> ReportingPlatform:
    return ReportingPlatform()


@pytest.fixture
def make_recording_client():
    """Factory for additional recording clients."""
    return RecordingClient
