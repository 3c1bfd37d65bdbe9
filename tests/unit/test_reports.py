"""Test report body schemas and normalization."""

import pytest

from capture_hub.core.enums import ReportType
from capture_hub.core.errors import ReportError
from capture_hub.integrations.reports import (
    CrashReportBody,
    DeprecationReportBody,
    InterventionReportBody,
    Report,
    body_fields,
    copy_body_fields,
    describe_body,
    normalize_body,
    parse_body,
)


class _BaseBody:
    """Body whose fields exist only as properties on a parent class."""

    @property
    def id(self):
        return "d1"

    @property
    def message(self):
        return "foo is deprecated"

    @property
    def sourceFile(self):
        return "app.js"

    @property
    def lineNumber(self):
        return 12


class InheritedBody(_BaseBody):
    pass


class TestBodyFields:
    def test_crash_fields(self):
        assert body_fields(ReportType.CRASH) == ["crashId", "reason"]

    def test_intervention_fields(self):
        assert body_fields("intervention") == [
            "id",
            "message",
            "sourceFile",
            "lineNumber",
            "columnNumber",
        ]


class TestCopyBodyFields:
    def test_from_mapping(self):
        plain = copy_body_fields("crash", {"crashId": "abc", "reason": "oom"})
        assert plain == {"crashId": "abc", "reason": "oom"}

    def test_from_inherited_properties(self):
        body = InheritedBody()
        assert vars(body) == {}
        plain = copy_body_fields(ReportType.DEPRECATION, body)
        assert plain == {
            "id": "d1",
            "message": "foo is deprecated",
            "sourceFile": "app.js",
            "lineNumber": 12,
        }

    def test_snake_case_attributes_accepted(self):
        class Body:
            crash_id = "c9"
            reason = None

        assert copy_body_fields("crash", Body()) == {"crashId": "c9"}

    def test_unknown_fields_dropped(self):
        plain = copy_body_fields("crash", {"crashId": "a", "extra": "x"})
        assert plain == {"crashId": "a"}


class TestParseBody:
    def test_crash(self):
        body = parse_body("crash", {"crashId": "abc", "reason": "oom"})
        assert isinstance(body, CrashReportBody)
        assert body.crash_id == "abc"

    def test_deprecation_with_removal_date(self):
        body = parse_body(
            "deprecation",
            {"id": "d", "message": "m", "anticipatedRemoval": "2026-01-01T00:00:00Z"},
        )
        assert isinstance(body, DeprecationReportBody)
        assert body.anticipated_removal.year == 2026

    def test_intervention(self):
        body = parse_body("intervention", {"id": "i", "message": "blocked"})
        assert isinstance(body, InterventionReportBody)

    def test_missing_required_field(self):
        with pytest.raises(ReportError, match="crash"):
            parse_body("crash", {"reason": "oom"})

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            parse_body("network-error", {})


class TestNormalizeAndDescribe:
    def test_normalize_uses_wire_names(self):
        plain = normalize_body("deprecation", InheritedBody())
        assert plain == {
            "id": "d1",
            "message": "foo is deprecated",
            "sourceFile": "app.js",
            "lineNumber": 12,
        }

    def test_describe_crash(self):
        assert describe_body(CrashReportBody(crash_id="abc", reason="oom")) == "abc oom"

    def test_describe_crash_without_reason(self):
        assert describe_body(CrashReportBody(crash_id="abc")) == "abc"

    def test_describe_deprecation(self):
        body = DeprecationReportBody(id="d1", message="foo is deprecated")
        assert describe_body(body) == "foo is deprecated"


class TestReportModel:
    def test_from_dict(self):
        report = Report.model_validate(
            {"type": "crash", "url": "https://x", "body": {"crashId": "a"}}
        )
        assert report.type == ReportType.CRASH
        assert report.body == {"crashId": "a"}

    def test_body_optional(self):
        assert Report(type=ReportType.INTERVENTION).body is None
