"""Report schemas for the reporting-observer integration.

A report is a tagged payload: ``type`` selects the body schema.  Bodies
coming from a host platform are often objects whose fields are only
reachable through attribute access (properties on a parent class), so
they are never copied by generic enumeration.  Instead each report type
lists its fields explicitly and :func:`copy_body_fields` reads exactly
those, from a mapping or from attributes.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from capture_hub.core.enums import ReportType
from capture_hub.core.errors import ReportError


class _ReportBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class CrashReportBody(_ReportBody):
    crash_id: str = Field(alias="crashId")
    reason: str | None = None


class DeprecationReportBody(_ReportBody):
    id: str
    message: str
    anticipated_removal: datetime | None = Field(
        default=None, alias="anticipatedRemoval"
    )
    source_file: str | None = Field(default=None, alias="sourceFile")
    line_number: int | None = Field(default=None, alias="lineNumber")
    column_number: int | None = Field(default=None, alias="columnNumber")


class InterventionReportBody(_ReportBody):
    id: str
    message: str
    source_file: str | None = Field(default=None, alias="sourceFile")
    line_number: int | None = Field(default=None, alias="lineNumber")
    column_number: int | None = Field(default=None, alias="columnNumber")


ReportBody = CrashReportBody | DeprecationReportBody | InterventionReportBody

BODY_SCHEMAS: dict[ReportType, type[_ReportBody]] = {
    ReportType.CRASH: CrashReportBody,
    ReportType.DEPRECATION: DeprecationReportBody,
    ReportType.INTERVENTION: InterventionReportBody,
}


class Report(BaseModel):
    """One report delivered by a reporting observer."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: ReportType
    url: str = ""
    # Raw body as delivered: a mapping or an attribute-bearing object
    body: Any = None


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def body_fields(report_type: ReportType | str) -> list[str]:
    """Wire names of the fields defined for ``report_type``."""
    schema = BODY_SCHEMAS[ReportType(report_type)]
    return [f.alias or name for name, f in schema.model_fields.items()]


def _read_field(body: Any, name: str) -> Any:
    if isinstance(body, Mapping):
        if name in body:
            return body[name]
        return body.get(_snake(name))
    value = getattr(body, name, None)
    if value is None:
        value = getattr(body, _snake(name), None)
    return value


def copy_body_fields(report_type: ReportType | str, body: Any) -> dict[str, Any]:
    """Copy every known field of ``body`` into a plain dict.

    Keys are wire names (``crashId``, ``sourceFile``); absent fields are
    left out.
    """
    plain: dict[str, Any] = {}
    for name in body_fields(report_type):
        value = _read_field(body, name)
        if value is not None:
            plain[name] = value
    return plain


def parse_body(report_type: ReportType | str, body: Any) -> ReportBody:
    """Validate ``body`` against the schema for ``report_type``.

    Raises:
        ReportError: a required field is missing or has the wrong type.
    """
    report_type = ReportType(report_type)
    try:
        return BODY_SCHEMAS[report_type].model_validate(
            copy_body_fields(report_type, body)
        )
    except ValidationError as exc:
        raise ReportError(f"Invalid {report_type.value} report body: {exc}") from exc


def body_to_dict(body: ReportBody) -> dict[str, Any]:
    """Flat JSON-friendly dict of a parsed body, keyed by wire names."""
    return body.model_dump(mode="json", by_alias=True, exclude_none=True)


def normalize_body(report_type: ReportType | str, body: Any) -> dict[str, Any]:
    """Return a validated flat copy of ``body``."""
    return body_to_dict(parse_body(report_type, body))


def describe_body(body: ReportBody) -> str:
    """One-line detail string for a parsed body.

    Crashes render as ``"<crashId> <reason>"`` (just the ID without a
    reason); other kinds use their message.
    """
    if isinstance(body, CrashReportBody):
        if body.reason is None:
            return body.crash_id
        return f"{body.crash_id} {body.reason}"
    return body.message
