"""Structured logging configuration using structlog.

This module configures structlog on top of the stdlib logging module with:
- Pretty-printed (or JSON) output on stderr
- Optional rotating JSON-lines log file
- UTC timestamps
- Component tracking
"""

import logging
import logging.handlers
import pathlib
import sys
from datetime import datetime, timezone
from typing import Any

import structlog


def _get_log_level() -> str:
    """Get log level from the environment.

    Returns:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    # Bootstrap from environment to avoid circular imports during startup.
    from nim_allowlist.config.bootstrap import get_bootstrap_log_level  # noqa: PLC0415

    return get_bootstrap_log_level()


def _get_log_format() -> str:
    """Get log format ("console" or "json") from the environment."""
    from nim_allowlist.config.bootstrap import get_bootstrap_log_format  # noqa: PLC0415

    return get_bootstrap_log_format()


def _add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add UTC timestamp to log event.

    Args:
        logger: The logger instance.
        method_name: The log method name (info, error, etc.).
        event_dict: The event dictionary.

    Returns:
        Event dictionary with timestamp added.
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_component(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add component name to a foreign (stdlib) log event.

    Args:
        logger: The logger instance.
        method_name: The log method name (info, error, etc.).
        event_dict: The event dictionary.

    Returns:
        Event dictionary with component added.
    """
    if logger is None or not hasattr(logger, "name"):
        event_dict["component"] = "unknown"
        return event_dict

    event_dict["component"] = logger.name.split(".")[-1]
    return event_dict


def _add_component_from_event_dict(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add component name from the logger name stored in the event dict.

    Runs after structlog's add_logger_name processor, e.g.
    "nim_allowlist.merger.merge" -> "merge".
    """
    logger_name = event_dict.get("logger", "")
    event_dict["component"] = logger_name.split(".")[-1] if logger_name else "unknown"
    return event_dict


_FOREIGN_PRE_CHAIN = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    _add_timestamp,
    _add_component,
]


def _configure_file_handler(log_file: pathlib.Path) -> logging.handlers.RotatingFileHandler:
    """Configure rotating file handler for JSON logs.

    Args:
        log_file: Path of the log file; parent directories are created.

    Returns:
        Configured RotatingFileHandler.
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=str(log_file),
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_FOREIGN_PRE_CHAIN,  # type: ignore[arg-type]
        )
    )
    return handler


def _configure_console_handler(log_format: str) -> logging.StreamHandler:
    """Configure stderr handler.

    Args:
        log_format: "console" for pretty-printed output, "json" for JSON lines.

    Returns:
        Configured StreamHandler.
    """
    handler = logging.StreamHandler(sys.stderr)

    if log_format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_FOREIGN_PRE_CHAIN,  # type: ignore[arg-type]
        )
    )
    return handler


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
    log_file: pathlib.Path | None = None,
) -> None:
    """Configure structlog for structured logging.

    Safe to call more than once; handlers on the root logger are replaced.
    The CLI calls this at startup with values from settings.

    Args:
        level: Console log level. Defaults to NIM_ALLOWLIST_LOG_LEVEL or WARNING.
        log_format: "console" or "json". Defaults to NIM_ALLOWLIST_LOG_FORMAT or console.
        log_file: Optional path for a rotating JSON log capturing INFO and above.
    """
    log_level = (level or _get_log_level()).upper()
    log_format = log_format or _get_log_format()

    # Root logger accepts all levels; individual handlers gate output.
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = _configure_console_handler(log_format)
    console_handler.setLevel(getattr(logging, log_level, logging.WARNING))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = _configure_file_handler(log_file)
        file_handler.setLevel(min(logging.INFO, console_handler.level))
        root_logger.addHandler(file_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            _add_component_from_event_dict,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:  # Returns structlog.stdlib.BoundLogger
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        Configured structlog logger instance.

    Example:
        >>> from nim_allowlist.telemetry import get_logger
        >>> log = get_logger(__name__)
        >>> log.info("document_written", path="/tmp/models.json")
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name)
