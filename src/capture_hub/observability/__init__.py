"""Logging setup for the capture hub."""

from capture_hub.observability.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
