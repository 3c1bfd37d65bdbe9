"""Capture Hub: in-process error and event capture dispatcher."""

from capture_hub.api import (
    add_breadcrumb,
    capture_event,
    capture_exception,
    capture_message,
    configure_scope,
    last_event_id,
    with_scope,
)
from capture_hub.core.enums import ReportType, Severity
from capture_hub.core.models import Breadcrumb, Event
from capture_hub.hub import API_VERSION, Hub, Layer, get_current_hub, use_hub
from capture_hub.scope import Scope
from capture_hub.sdk import init

__version__ = "0.1.0"

__all__ = [
    "API_VERSION",
    "Breadcrumb",
    "Event",
    "Hub",
    "Layer",
    "ReportType",
    "Scope",
    "Severity",
    "add_breadcrumb",
    "capture_event",
    "capture_exception",
    "capture_message",
    "configure_scope",
    "get_current_hub",
    "init",
    "last_event_id",
    "use_hub",
    "with_scope",
]
