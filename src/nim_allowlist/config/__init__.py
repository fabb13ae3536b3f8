"""Configuration management for nim-allowlist.

Integrates environment variables, .env files, defaults and the catalogue
data file.
"""

from nim_allowlist.config.catalogue_loader import CatalogueError, load_catalogue
from nim_allowlist.config.env_loader import Environment, get_environment
from nim_allowlist.config.loader import ConfigLoadError
from nim_allowlist.config.settings import (
    AppConfig,
    get_settings,
    load_app_config,
    reset_settings,
)

__all__ = [
    # App-level settings
    "AppConfig",
    "get_settings",
    "load_app_config",
    "reset_settings",
    "Environment",
    "get_environment",
    # Loaders
    "load_catalogue",
    # Exception classes
    "ConfigLoadError",
    "CatalogueError",
]
