"""structlog setup for the library and the CLI.

Everything is written to stderr: stdout carries the extracted content.
"""

import logging
import sys
from typing import Any

import structlog

from pagereader.config import Settings, get_settings

# Third-party loggers that would flood debug output with request chatter
QUIET_LOGGERS = ("httpx", "httpcore")


def _renderer(settings: Settings) -> Any:
    if settings.is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging(level: str | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Level name overriding ``Settings.log_level`` (e.g. from ``--log-level``)
    """
    settings = get_settings()
    log_level = logging.getLevelName((level or settings.log_level).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        _renderer(settings),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # pytest swaps stderr per test; a cached logger would keep the old stream
        cache_logger_on_first_use=not settings.is_test,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
