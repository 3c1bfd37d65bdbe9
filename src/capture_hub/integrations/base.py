"""Integration contract and installer.

An integration hooks into an ambient event source and turns what it
sees into capture calls on the hub it was installed with.  Each
integration name is installed at most once per process.
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Iterable

from capture_hub.core.errors import DuplicateIntegrationError
from capture_hub.hub.hub import Hub

logger = logging.getLogger(__name__)

# Names installed in this process, in install order
_installed_integrations: list[str] = []


class Integration(abc.ABC):
    """Pluggable producer of capture calls."""

    #: Stable identifier, unique across integrations.
    name: str = ""

    @abc.abstractmethod
    def install(self, hub: Hub) -> None:
        """Register with the event source.

        Must return without effect if the source is unavailable.
        """


def setup_integrations(
    integrations: Iterable[Integration], hub: Hub
) -> dict[str, Integration]:
    """Install ``integrations`` in order, skipping already installed names.

    Returns the integrations configured for this call, keyed by name.

    Raises:
        DuplicateIntegrationError: two entries share a name.
    """
    configured: dict[str, Integration] = {}
    for integration in integrations:
        if integration.name in configured:
            raise DuplicateIntegrationError(integration.name)
        configured[integration.name] = integration

        if integration.name in _installed_integrations:
            logger.debug("Integration %s already installed", integration.name)
            continue
        integration.install(hub)
        _installed_integrations.append(integration.name)
        logger.info("Integration installed: %s", integration.name)
    return configured


def installed_integrations() -> list[str]:
    """Names of the integrations installed in this process."""
    return list(_installed_integrations)


def reset_installed_integrations() -> None:
    """Forget install history. For testing."""
    _installed_integrations.clear()
