"""Event and breadcrumb models.

The hub treats these as opaque payloads; clients build and consume them.
"""

from __future__ import annotations

import traceback
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .enums import Severity
from .ids import new_event_id, utc_now


class Breadcrumb(BaseModel):
    """A timestamped trail entry recorded on a scope."""

    timestamp: datetime = Field(default_factory=utc_now)
    category: str = "default"
    message: str | None = None
    level: Severity = Severity.INFO
    type: str = "default"
    data: dict[str, Any] = Field(default_factory=dict)


class ExceptionInfo(BaseModel):
    type: str
    value: str
    module: str | None = None
    stacktrace: list[str] = Field(default_factory=list)

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExceptionInfo:
        exc_type = type(exc)
        return cls(
            type=exc_type.__name__,
            value=str(exc),
            module=exc_type.__module__,
            stacktrace=traceback.format_tb(exc.__traceback__),
        )


class Event(BaseModel):
    """A captured event, after scope data has been applied."""

    event_id: str = Field(default_factory=new_event_id)
    timestamp: datetime = Field(default_factory=utc_now)
    level: Severity | None = None
    message: str | None = None
    exception: ExceptionInfo | None = None
    environment: str | None = None
    release: str | None = None
    tags: dict[str, str] = Field(default_factory=dict)
    extra: dict[str, Any] = Field(default_factory=dict)
    user: dict[str, Any] = Field(default_factory=dict)
    fingerprint: list[str] = Field(default_factory=list)
    breadcrumbs: list[Breadcrumb] = Field(default_factory=list)
