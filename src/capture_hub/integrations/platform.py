"""In-process reporting platform hook.

Stands in for the host's reporting-observer facility: producers queue
reports on a :class:`ReportingPlatform`, and observers created from it
receive them in batches.  An observer created with ``buffered=True``
first receives the reports queued before it started observing.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable
from typing import Any

from capture_hub.core.enums import ReportType

from .reports import Report

ReportCallback = Callable[[list[Report]], None]

DEFAULT_BUFFER_SIZE = 100


class ReportObserver:
    """Delivers reports of the selected types to one callback."""

    def __init__(
        self,
        platform: ReportingPlatform,
        callback: ReportCallback,
        buffered: bool = False,
        types: Iterable[ReportType | str] | None = None,
    ) -> None:
        self._platform = platform
        self._callback = callback
        self._buffered = buffered
        self._types = {ReportType(t) for t in types} if types is not None else None
        self._observing = False

    @property
    def observing(self) -> bool:
        return self._observing

    def accepts(self, report: Report) -> bool:
        return self._types is None or report.type in self._types

    def observe(self) -> None:
        """Start receiving reports; buffered reports are delivered first."""
        if self._observing:
            return
        self._observing = True
        self._platform._attach(self)
        if self._buffered:
            self.deliver(self._platform.buffered_reports())

    def disconnect(self) -> None:
        self._observing = False
        self._platform._detach(self)

    def deliver(self, reports: Iterable[Report]) -> None:
        batch = [r for r in reports if self.accepts(r)]
        if batch:
            self._callback(batch)


class ReportingPlatform:
    """Source of reports with a bounded buffer of past reports."""

    def __init__(
        self, buffer_size: int = DEFAULT_BUFFER_SIZE, enabled: bool = True
    ) -> None:
        self._buffer: deque[Report] = deque(maxlen=buffer_size)
        self._observers: list[ReportObserver] = []
        self._enabled = enabled

    def supports_reporting_observer(self) -> bool:
        return self._enabled

    def create_observer(
        self,
        callback: ReportCallback,
        buffered: bool = False,
        types: Iterable[ReportType | str] | None = None,
    ) -> ReportObserver:
        return ReportObserver(self, callback, buffered=buffered, types=types)

    def queue_report(self, report: Report | dict[str, Any]) -> Report:
        """Record a report and deliver it to every observer."""
        if not isinstance(report, Report):
            report = Report.model_validate(report)
        self._buffer.append(report)
        for observer in list(self._observers):
            observer.deliver([report])
        return report

    def queue_reports(self, reports: Iterable[Report | dict[str, Any]]) -> list[Report]:
        return [self.queue_report(r) for r in reports]

    def buffered_reports(self) -> list[Report]:
        return list(self._buffer)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def _attach(self, observer: ReportObserver) -> None:
        self._observers.append(observer)

    def _detach(self, observer: ReportObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)
