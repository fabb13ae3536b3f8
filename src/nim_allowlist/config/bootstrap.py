"""Bootstrap configuration helpers (pre-settings).

These helpers cover the small amount of configuration needed before the
Pydantic settings can be loaded, e.g. the log level used while settings
themselves are being read.

Keep this module dependency-light (no telemetry imports) to avoid circular imports.
"""

from __future__ import annotations

import os

from nim_allowlist.config.validators import validate_log_format, validate_log_level

ENV_PREFIX = "NIM_ALLOWLIST_"


def get_bootstrap_log_level(default: str = "WARNING") -> str:
    """Get logging level from environment without importing settings.

    Args:
        default: Default log level if not set or invalid.

    Returns:
        Uppercased, validated log level string.
    """
    value = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", default)
    try:
        return validate_log_level(value)
    except ValueError:
        return validate_log_level(default)


def get_bootstrap_log_format(default: str = "console") -> str:
    """Get log format from environment without importing settings.

    Args:
        default: Default log format if not set or invalid.

    Returns:
        Lowercased, validated log format string.
    """
    value = os.getenv(f"{ENV_PREFIX}LOG_FORMAT", default)
    try:
        return validate_log_format(value)
    except ValueError:
        return validate_log_format(default)
