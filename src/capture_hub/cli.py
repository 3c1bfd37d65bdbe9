"""CLI entry point for the capture hub."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from .core.enums import Severity

if TYPE_CHECKING:
    from .hub.hub import Hub
    from .integrations.platform import ReportingPlatform


def _bootstrap(
    config: str | None, platform: ReportingPlatform | None = None
) -> Hub:
    from .core.config import load_settings
    from .observability.logger import setup_logging
    from .sdk import init

    settings = load_settings(config)
    setup_logging(
        settings.observability.log_level, settings.observability.log_format
    )
    return init(settings=settings, platform=platform)


_flush_timeout_option = click.option(
    "--flush-timeout",
    type=float,
    default=5.0,
    show_default=True,
    help="Seconds to wait for captured events to be delivered",
)


def _wait_for_delivery(hub: Hub, timeout: float) -> None:
    if not hub.flush_sync(timeout):
        click.echo(
            f"Delivery still pending after {timeout}s; exiting anyway", err=True
        )


@click.group()
def main() -> None:
    """Capture Hub."""


@main.command()
@click.argument("text")
@click.option(
    "--level",
    type=click.Choice([s.value for s in Severity]),
    default=Severity.INFO.value,
    help="Severity level",
)
@click.option("--config", default=None, help="Config file path")
@_flush_timeout_option
def message(
    text: str, level: str, config: str | None, flush_timeout: float
) -> None:
    """Capture a message and print its event ID."""
    hub = _bootstrap(config)
    event_id = hub.capture_message(text, Severity(level))
    _wait_for_delivery(hub, flush_timeout)
    click.echo(event_id)


@main.command("replay-reports")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--config", default=None, help="Config file path")
@_flush_timeout_option
def replay_reports(path: Path, config: str | None, flush_timeout: float) -> None:
    """Feed a JSON list of reports through the reporting observer."""
    from .integrations.platform import ReportingPlatform

    reports = json.loads(path.read_text())
    if isinstance(reports, dict):
        reports = [reports]

    platform = ReportingPlatform(buffer_size=max(len(reports), 1))
    platform.queue_reports(reports)
    hub = _bootstrap(config, platform=platform)
    _wait_for_delivery(hub, flush_timeout)
    click.echo(f"Replayed {len(reports)} report(s); last event: {hub.last_event_id()}")


if __name__ == "__main__":
    main()
