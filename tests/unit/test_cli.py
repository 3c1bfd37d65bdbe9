"""Test the capture-hub CLI."""

import json

import pytest
import structlog
from click.testing import CliRunner

from capture_hub.cli import main
from capture_hub.hub.hub import Hub


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


class TestMessageCommand:
    def test_prints_event_id(self):
        result = CliRunner().invoke(main, ["message", "hello", "--level", "warning"])
        assert result.exit_code == 0, result.output
        event_id = result.output.strip().splitlines()[-1]
        assert len(event_id) == 32

    def test_waits_for_delivery_before_exit(self, monkeypatch):
        waited = []

        def fake_flush_sync(self, timeout=None):
            waited.append(timeout)
            return True

        monkeypatch.setattr(Hub, "flush_sync", fake_flush_sync)
        result = CliRunner().invoke(
            main, ["message", "hello", "--flush-timeout", "2.5"]
        )
        assert result.exit_code == 0, result.output
        assert waited == [2.5]

    def test_reports_undelivered_events(self, monkeypatch):
        monkeypatch.setattr(Hub, "flush_sync", lambda self, timeout=None: False)
        result = CliRunner().invoke(main, ["message", "hello"])
        assert result.exit_code == 0
        assert "Delivery still pending after 5.0s" in result.output

    def test_rejects_unknown_level(self):
        result = CliRunner().invoke(main, ["message", "hello", "--level", "loud"])
        assert result.exit_code != 0


class TestReplayReports:
    def test_replays_file(self, tmp_path):
        path = tmp_path / "reports.json"
        path.write_text(
            json.dumps(
                [
                    {"type": "crash", "url": "https://x", "body": {"crashId": "abc"}},
                    {
                        "type": "deprecation",
                        "url": "https://y",
                        "body": {"id": "d1", "message": "old api"},
                    },
                ]
            )
        )
        result = CliRunner().invoke(main, ["replay-reports", str(path)])
        assert result.exit_code == 0, result.output
        assert "Replayed 2 report(s)" in result.output
        assert "last event: None" not in result.output

    def test_missing_file(self, tmp_path):
        result = CliRunner().invoke(
            main, ["replay-reports", str(tmp_path / "nope.json")]
        )
        assert result.exit_code != 0
