"""Custom exception hierarchy for the capture hub.

Capture operations never raise; these are for bootstrap, configuration
and report parsing only.
"""


class CaptureHubError(Exception):
    """Base exception for all capture hub errors."""


# --- Configuration ---
class ConfigError(CaptureHubError):
    """Invalid or missing configuration."""


# --- Integrations ---
class IntegrationError(CaptureHubError):
    """Integration setup error."""


class DuplicateIntegrationError(IntegrationError):
    """Two integrations share the same name in one configured list."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Integration [{name}] configured more than once")


# --- Reports ---
class ReportError(CaptureHubError):
    """A report could not be parsed into a known shape."""
