"""Value checks shared by AppConfig and the bootstrap logging helpers."""

from collections.abc import Callable
from pathlib import Path

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("console", "json")


def _choice(
    field: str, value: str, allowed: tuple[str, ...], normalize: Callable[[str], str]
) -> str:
    normalized = normalize(value.strip())
    if normalized not in allowed:
        raise ValueError(f"{field} must be one of {', '.join(allowed)}, got {value!r}")
    return normalized


def validate_log_level(value: str) -> str:
    """Return the upper-cased log level, or raise ValueError for an unknown one."""
    return _choice("log_level", value, LOG_LEVELS, str.upper)


def validate_log_format(value: str) -> str:
    """Return the lower-cased log format (``console`` or ``json``)."""
    return _choice("log_format", value, LOG_FORMATS, str.lower)


def resolve_path(value: Path | str) -> Path:
    """Expand ``~`` and make ``value`` absolute relative to the working directory.

    Settings and command-line overrides both go through here, so the merger
    only ever sees absolute paths.
    """
    return (Path.cwd() / Path(value).expanduser()).resolve()
