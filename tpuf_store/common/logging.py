"""structlog setup for the adapter.

The store logs through module-scoped ``structlog`` loggers and reports the
latency of each remote call via ``log_performance``. Applications that want
JSON or console output call ``configure_logging`` (or
``configure_logging_from_config``) once at startup.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import LoggerFactory, add_logger_name

from .config import TurbopufferConfig


def configure_logging(
    service_name: str,
    log_level: str = "INFO",
    log_format: str = "json",
) -> None:
    """Route structlog through stdlib logging and bind ``service``.

    ``log_format`` is ``json`` or anything else for the colored console
    renderer; ``log_level`` is a stdlib level name, case-insensitive.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_logger_name,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a lazily bound structlog logger."""
    return structlog.get_logger(name)


def log_performance(operation: str, duration_ms: float, **kwargs: Any) -> None:
    """Emit one ``performance`` event with ``duration_ms`` and extra fields."""
    logger = get_logger("performance")
    logger.info(
        f"Operation {operation} completed",
        operation=operation,
        duration_ms=duration_ms,
        **kwargs
    )


def configure_logging_from_config(
    config: TurbopufferConfig,
    service_name: str = "tpuf-store",
) -> None:
    """Configure logging from ``tpuf_log_level``/``tpuf_log_format`` settings."""
    configure_logging(service_name, config.tpuf_log_level, config.tpuf_log_format)
