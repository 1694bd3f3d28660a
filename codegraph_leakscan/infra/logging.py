"""
Structured Logging with structlog

Console output for interactive runs, JSON lines for CI pipelines.
"""

import logging
import sys

import structlog
from structlog.contextvars import merge_contextvars

from codegraph_leakscan.exceptions import InvalidConfigurationError

LOG_FORMATS = ("console", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str = "INFO", format: str = "console") -> None:
    """
    Setup structured logging for a scan run.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("console" for humans, "json" for machines)

    Raises:
        InvalidConfigurationError: If level or format is unknown
    """
    if format not in LOG_FORMATS:
        raise InvalidConfigurationError(f"Unknown log format: {format}", {"allowed": list(LOG_FORMATS)})

    if level.upper() not in LOG_LEVELS:
        raise InvalidConfigurationError(f"Unknown log level: {level}", {"allowed": list(LOG_LEVELS)})

    numeric_level = getattr(logging, level.upper())

    # Logs go to stderr so the report can be piped from stdout
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    shared_processors = [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if format == "json":
        output_processors = [
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        output_processors = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=shared_processors + output_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__ from calling module)

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("entity_catalog_built", entities=42)
        ```
    """
    return structlog.get_logger(name)
