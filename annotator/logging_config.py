import logging
import sys

import structlog

from annotator.config import settings


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog for the process: ISO timestamps, level filter, JSON or console output."""
    level_name = (level or settings.log_level).upper()
    level_value = getattr(logging, level_name, logging.INFO)
    fmt = fmt or settings.log_format

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
