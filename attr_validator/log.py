"""Structured logging for the CLI: structlog rendered through one stderr handler."""

from __future__ import annotations

import logging
import os
import sys

import structlog

LOGGER_NAME = "attr_validator"


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Route structlog and stdlib records of the package to stderr.

    Arguments override the environment:
        ATTR_VALIDATOR_LOG_LEVEL  - log level (default: INFO)
        ATTR_VALIDATOR_LOG_FORMAT - console | json (default: console)

    stdout is left to reports. Calling this again replaces the handler.
    """
    log_level = (level or os.environ.get("ATTR_VALIDATOR_LOG_LEVEL", "INFO")).upper()
    log_format = (fmt or os.environ.get("ATTR_VALIDATOR_LOG_FORMAT", "console")).lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.format_exc_info,
    ]
    if log_format == "json":
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers[:] = [handler]
    logger.setLevel(log_level)
    logger.propagate = False
