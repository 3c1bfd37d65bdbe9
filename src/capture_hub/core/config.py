"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings

from .enums import LogFormat, ReportType
from .errors import ConfigError

MAX_BREADCRUMBS = 100


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class ReportingObserverConfig(BaseModel):
    types: list[ReportType] = Field(default_factory=lambda: list(ReportType))


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.JSON


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level SDK settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    environment: str | None = None
    release: str | None = None
    debug: bool = False

    max_breadcrumbs: int = Field(default=MAX_BREADCRUMBS, ge=0, le=MAX_BREADCRUMBS)
    default_integrations: bool = True

    # Sub-configs
    reporting_observer: ReportingObserverConfig = Field(
        default_factory=ReportingObserverConfig
    )
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "CAPTURE_HUB_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: the file is not valid TOML or a value fails validation.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            with open(path, "rb") as f:
                try:
                    data = tomli.load(f)
                except tomli.TOMLDecodeError as exc:
                    raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if overrides:
        data.update(overrides)

    try:
        return Settings(**data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
