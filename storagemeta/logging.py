"""Structured logging for storagemeta.

Logs go to stderr so that command output on stdout (``storagemeta plan``)
stays machine readable. JSON rendering is the default; the console
renderer is meant for running the CLI by hand.
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(
    json_format: bool = True,
    level: str = "INFO",
    add_timestamp: bool = True,
) -> None:
    """Configure structlog and the standard library root logger.

    Args:
        json_format: If True, output JSON logs; otherwise use console format.
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        add_timestamp: Whether to add timestamps to log entries.
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )
    # httpx logs every request at INFO; the submission engine logs its own.
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (usually __name__).

    Returns:
        A bound structlog logger.
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in every subsequent log entry.

    The CLI uses this to tag a whole metadata run with its endpoint.

    Args:
        **kwargs: Context variables to bind.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    """Remove specific context variables.

    Args:
        *keys: Context variable names to remove.
    """
    structlog.contextvars.unbind_contextvars(*keys)
