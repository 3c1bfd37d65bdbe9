"""Enumerations used across the capture hub."""

from enum import Enum


class Severity(str, Enum):
    FATAL = "fatal"
    ERROR = "error"
    WARNING = "warning"
    LOG = "log"
    INFO = "info"
    DEBUG = "debug"
    CRITICAL = "critical"


class ReportType(str, Enum):
    """Kinds of report delivered by a reporting observer."""

    CRASH = "crash"
    DEPRECATION = "deprecation"
    INTERVENTION = "intervention"


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"
