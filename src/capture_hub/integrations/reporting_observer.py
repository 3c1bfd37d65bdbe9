"""Reporting-observer integration.

Subscribes to a :class:`ReportingPlatform` and turns every crash,
deprecation and intervention report into one captured message.  Each
report is captured inside its own scope carrying the report URL and a
flat copy of the report body as extras.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from capture_hub.core.enums import ReportType
from capture_hub.core.errors import ReportError
from capture_hub.hub.hub import Hub
from capture_hub.scope import Scope

from .base import Integration
from .platform import ReportObserver, ReportingPlatform
from .reports import (
    Report,
    body_to_dict,
    copy_body_fields,
    describe_body,
    parse_body,
)

logger = logging.getLogger(__name__)

NO_DETAILS = "No details available"


class ReportingObserver(Integration):
    """Captures reports delivered by the platform's reporting hook.

    Parameters
    ----------
    types:
        Report kinds to observe.  All known kinds if omitted.
    platform:
        Reporting hook to observe.  Without one, ``install`` does nothing.
    """

    name = "ReportingObserver"

    def __init__(
        self,
        types: Iterable[ReportType | str] | None = None,
        platform: ReportingPlatform | None = None,
    ) -> None:
        self._types = (
            [ReportType(t) for t in types] if types is not None else list(ReportType)
        )
        self._platform = platform
        self._hub: Hub | None = None
        self._observer: ReportObserver | None = None

    @property
    def types(self) -> list[ReportType]:
        return list(self._types)

    @property
    def observer(self) -> ReportObserver | None:
        return self._observer

    def install(self, hub: Hub) -> None:
        platform = self._platform
        supports = getattr(platform, "supports_reporting_observer", None)
        if platform is None or supports is None or not supports():
            logger.debug("Reporting observer not supported; %s inactive", self.name)
            return

        self._hub = hub
        self._observer = platform.create_observer(
            self.handler, buffered=True, types=self._types
        )
        self._observer.observe()

    def handler(self, reports: Iterable[Report | dict[str, Any]]) -> None:
        """Capture each report inside its own scope."""
        hub = self._hub
        if hub is None:
            return
        for report in reports:
            if not isinstance(report, Report):
                report = Report.model_validate(report)
            hub.with_scope(lambda scope, r=report: self._capture_report(hub, scope, r))

    def _capture_report(self, hub: Hub, scope: Scope, report: Report) -> str:
        scope.set_extra("url", report.url)

        label = f"{self.name} [{report.type.value}]"
        details = NO_DETAILS

        if report.body is not None:
            try:
                body = parse_body(report.type, report.body)
            except ReportError:
                logger.warning(
                    "Malformed %s report from %s", report.type.value, report.url
                )
                scope.set_extra("body", copy_body_fields(report.type, report.body))
            else:
                scope.set_extra("body", body_to_dict(body))
                details = describe_body(body)

        return hub.capture_message(f"{label}: {details}")
