# Este archivo configura el logging estructurado con structlog sobre el logging estándar.

"""
Structured logging configuration using structlog.

Logs go to stderr so that stdout only carries the startup banner.
The HTTP access log of the request handler is routed through here too.
"""
import logging
import sys
from pathlib import Path

import structlog

LOG_FILE_NAME = "logo-server.log"


def configure_default_logging() -> None:
    """
    Send structlog output to stderr until setup_logging() runs.

    structlog otherwise prints to stdout, which must only carry the
    startup banner when the server is embedded as a library.
    """
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def _shared_processors() -> list:
    """Processors applied to both structlog and foreign (stdlib) records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _build_formatter(json_logs: bool) -> structlog.stdlib.ProcessorFormatter:
    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        # Colors only when a terminal is attached
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def setup_logging(
    level: str = "INFO",
    json_logs: bool = False,
    log_dir: Path | None = None
) -> None:
    """
    Configure structured logging with structlog.

    Replaces any handlers already on the root logger, so calling it
    twice does not duplicate output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON format. If False, use console format
        log_dir: Optional directory for file logging
    """
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = _build_formatter(json_logs)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / LOG_FILE_NAME))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance (typically for __name__)."""
    return structlog.get_logger(name)


if not structlog.is_configured():
    configure_default_logging()
