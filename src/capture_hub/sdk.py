"""SDK bootstrap.

``init`` builds a client from settings, binds it to the current hub and
installs the configured integrations once, in order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from capture_hub.clients.log_client import LoggingClient
from capture_hub.core.config import Settings
from capture_hub.hub.current import get_current_hub
from capture_hub.hub.hub import Hub
from capture_hub.integrations.base import Integration, setup_integrations
from capture_hub.integrations.platform import ReportingPlatform
from capture_hub.integrations.reporting_observer import ReportingObserver

logger = logging.getLogger(__name__)


def default_integrations(
    settings: Settings | None = None,
    platform: ReportingPlatform | None = None,
) -> list[Integration]:
    """Integrations installed when none are given explicitly."""
    settings = settings or Settings()
    return [
        ReportingObserver(types=settings.reporting_observer.types, platform=platform),
    ]


def init(
    settings: Settings | None = None,
    client: Any | None = None,
    integrations: Sequence[Integration] | None = None,
    hub: Hub | None = None,
    platform: ReportingPlatform | None = None,
) -> Hub:
    """Bind a client to ``hub`` (default: current hub) and install integrations.

    Args:
        settings: SDK settings; defaults plus environment if omitted.
        client: Client to bind; a :class:`LoggingClient` if omitted.
        integrations: Integrations to install in order.  When omitted the
            defaults are used, unless ``settings.default_integrations`` is
            false.
        hub: Hub to initialise.
        platform: Reporting hook handed to the default integrations.
    """
    settings = settings or Settings()
    hub = hub or get_current_hub()
    client = client if client is not None else LoggingClient(settings)

    hub.bind_client(client)

    if integrations is None:
        integrations = (
            default_integrations(settings, platform)
            if settings.default_integrations
            else []
        )
    installed = setup_integrations(integrations, hub)
    logger.info(
        "SDK initialised (client=%s, integrations=%s)",
        type(client).__name__,
        ",".join(installed) or "none",
    )
    return hub


def last_event_id() -> str | None:
    """ID of the last event captured on the current hub."""
    return get_current_hub().last_event_id()
