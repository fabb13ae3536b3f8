"""Application configuration settings.

This module provides the AppConfig class and settings singleton. All
filesystem locations are resolved here, once, and handed to the merger as
explicit values.
"""

from pathlib import Path

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nim_allowlist.catalogue.provider import (
    DEFAULT_PROVIDER_API,
    DEFAULT_PROVIDER_BASE_URL,
    DEFAULT_PROVIDER_NAME,
)
from nim_allowlist.config.env_loader import Environment, get_environment, load_env_files
from nim_allowlist.config.validators import (
    resolve_path,
    validate_log_format,
    validate_log_level,
)

log = structlog.get_logger(__name__)


class AppConfig(BaseSettings):
    """Unified application configuration.

    Loads configuration from environment variables (``NIM_ALLOWLIST_`` prefix),
    .env files, and defaults. Validates all values using Pydantic.
    """

    model_config = SettingsConfigDict(
        # .env files are loaded manually via env_loader to support
        # environment-specific files with priority order
        env_prefix="NIM_ALLOWLIST_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # Environment
    environment: Environment = Field(
        default_factory=get_environment, description="Current environment"
    )
    debug: bool = Field(default=False, description="Log debug events regardless of log_level")

    # Telemetry
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(default="console", description="Log format (json or console)")
    log_file: Path | None = Field(
        default=None, description="Optional rotating JSON log file (disabled when unset)"
    )

    # OpenClaw locations
    openclaw_home: Path = Field(
        default=Path("~/.openclaw"), description="OpenClaw configuration directory"
    )
    models_json_path: Path | None = Field(
        default=None,
        description="Agent model registry (default: <openclaw_home>/agents/main/agent/models.json)",
    )
    openclaw_json_path: Path | None = Field(
        default=None,
        description="Application config (default: <openclaw_home>/openclaw.json)",
    )

    # Catalogue
    catalogue_path: Path | None = Field(
        default=None, description="Catalogue data file (default: bundled catalogue)"
    )
    catalogue_source: str = Field(
        default=DEFAULT_PROVIDER_NAME, description="Catalogue source key to register"
    )

    # Provider entry
    provider_name: str = Field(
        default=DEFAULT_PROVIDER_NAME, min_length=1, description="Provider key"
    )
    provider_base_url: str = Field(
        default=DEFAULT_PROVIDER_BASE_URL, description="Base URL for a newly created provider"
    )
    provider_api: str = Field(
        default=DEFAULT_PROVIDER_API, description="API style tag for a newly created provider"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        return validate_log_level(v)

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        return validate_log_format(v)

    @field_validator(
        "log_file",
        "openclaw_home",
        "models_json_path",
        "openclaw_json_path",
        "catalogue_path",
        mode="before",
    )
    @classmethod
    def resolve_paths(cls, v: Path | str | None) -> Path | None:
        """Expand and resolve paths to absolute."""
        if v is None or v == "":
            return None
        return resolve_path(v)

    @property
    def effective_log_level(self) -> str:
        """Log level to configure, forced to DEBUG in debug mode."""
        return "DEBUG" if self.debug else self.log_level

    @property
    def resolved_models_json_path(self) -> Path:
        """Path of the agent model registry document."""
        if self.models_json_path is not None:
            return self.models_json_path
        return self.openclaw_home / "agents" / "main" / "agent" / "models.json"

    @property
    def resolved_openclaw_json_path(self) -> Path:
        """Path of the application config document."""
        if self.openclaw_json_path is not None:
            return self.openclaw_json_path
        return self.openclaw_home / "openclaw.json"


_settings: AppConfig | None = None


def load_app_config() -> AppConfig:
    """Load and validate application configuration.

    This function:
    1. Loads .env files in priority order (via env_loader)
    2. Creates AppConfig instance (reads from environment variables)
    3. Validates all values using Pydantic

    Returns:
        Validated AppConfig instance.

    Raises:
        ValidationError: If configuration validation fails.
    """
    log.debug("loading_app_config", environment=get_environment().value)

    load_env_files()

    try:
        config = AppConfig()
        log.debug(
            "app_config_loaded",
            environment=config.environment.value,
            openclaw_home=str(config.openclaw_home),
            log_level=config.log_level,
        )
        return config
    except Exception as e:
        log.error("app_config_load_failed", error=str(e), error_type=type(e).__name__)
        raise


def get_settings() -> AppConfig:
    """Get the application settings singleton.

    Returns:
        AppConfig instance (created on first call).
    """
    global _settings
    if _settings is None:
        _settings = load_app_config()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
