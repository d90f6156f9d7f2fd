"""structlog setup for the API process."""

import logging
import sys
from typing import TextIO

import structlog


def configure_logger(
    level: str = "INFO", json_logs: bool = True, stream: TextIO | None = None
) -> None:
    """
    Route every ``structlog.get_logger()`` call through one processor chain.

    ``level`` is a standard logging level name; unknown names fall back to
    INFO. Local development can switch ``json_logs`` off for readable lines.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=True,
    )
