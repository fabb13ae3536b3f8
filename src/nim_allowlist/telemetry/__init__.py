"""Telemetry module: structured logging via structlog and semantic event constants."""

from nim_allowlist.telemetry.events import (
    CATALOGUE_LOADED,
    DOCUMENT_BACKED_UP,
    DOCUMENT_LOADED,
    DOCUMENT_WRITTEN,
    MODELS_MERGED,
    PATCH_COMPLETED,
    PATCH_FAILED,
    PATCH_STARTED,
    PROVIDER_ENTRY_CREATED,
)
from nim_allowlist.telemetry.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    # Event constants
    "CATALOGUE_LOADED",
    "DOCUMENT_LOADED",
    "DOCUMENT_BACKED_UP",
    "DOCUMENT_WRITTEN",
    "PROVIDER_ENTRY_CREATED",
    "MODELS_MERGED",
    "PATCH_STARTED",
    "PATCH_COMPLETED",
    "PATCH_FAILED",
]
