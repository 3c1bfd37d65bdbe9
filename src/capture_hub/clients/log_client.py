"""Client that writes captured events to a structlog logger."""

from __future__ import annotations

from capture_hub.core.config import Settings
from capture_hub.core.enums import Severity
from capture_hub.core.models import Event
from capture_hub.observability.logger import get_logger

from .base import BaseClient

_LOG_METHODS = {
    Severity.FATAL: "critical",
    Severity.CRITICAL: "critical",
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.LOG: "info",
    Severity.INFO: "info",
    Severity.DEBUG: "debug",
}


class LoggingClient(BaseClient):
    """Writes each event as one structured log entry."""

    def __init__(
        self,
        settings: Settings | None = None,
        logger_name: str = "capture_hub.events",
    ) -> None:
        super().__init__(settings)
        self._log = get_logger(logger_name)

    async def _send_event(self, event: Event) -> None:
        method = _LOG_METHODS.get(event.level or Severity.INFO, "info")
        getattr(self._log, method)(
            event.message or "event",
            **event.model_dump(
                mode="json", exclude={"message", "level", "timestamp"}, exclude_none=True
            ),
        )
