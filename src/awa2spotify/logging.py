"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Literal, TextIO

import structlog


# Map string levels to logging module constants
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(
    level: str = "WARNING",
    format: Literal["console", "json"] = "console",
    stream: TextIO | None = None,
) -> None:
    """Configure structlog for the application.
    
    Debug output is diagnostic printing meant to be read alongside the
    command's own output, so it goes to stdout. Everything else goes to
    stderr unless a stream is given.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format - "console" for human-readable, "json" for machine-readable
        stream: Optional output stream override
    """
    log_level = LOG_LEVELS.get(level.upper(), logging.WARNING)
    if stream is None:
        stream = sys.stdout if log_level == logging.DEBUG else sys.stderr

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format == "json":
        renderers: list[structlog.typing.Processor] = [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=stream.isatty())]

    structlog.configure(
        processors=[*shared_processors, *renderers],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        # configure_logging runs once per CLI invocation, and several times in one
        # process under test; module-level loggers must follow the latest call.
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.
    
    Args:
        name: Optional logger name for context
        
    Returns:
        Configured structlog logger
    """
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
