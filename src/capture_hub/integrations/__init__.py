"""Integrations: producers that feed platform signals into the hub."""

from capture_hub.integrations.base import (
    Integration,
    installed_integrations,
    reset_installed_integrations,
    setup_integrations,
)
from capture_hub.integrations.platform import ReportingPlatform, ReportObserver
from capture_hub.integrations.reporting_observer import ReportingObserver
from capture_hub.integrations.reports import (
    CrashReportBody,
    DeprecationReportBody,
    InterventionReportBody,
    Report,
    normalize_body,
)

__all__ = [
    "CrashReportBody",
    "DeprecationReportBody",
    "Integration",
    "InterventionReportBody",
    "Report",
    "ReportObserver",
    "ReportingObserver",
    "ReportingPlatform",
    "installed_integrations",
    "normalize_body",
    "reset_installed_integrations",
    "setup_integrations",
]
