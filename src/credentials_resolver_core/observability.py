"""Structured logging setup.

This module configures structlog on top of the standard library logging
module. Development mode renders human-readable console output, otherwise
one JSON object is emitted per event.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog


def configure_logging(log_level: str = "INFO", *, dev_mode: bool = False) -> None:
    """Configure structlog and the root logger.

    Args:
        log_level: Name of the minimum level to emit (DEBUG, INFO, ...).
        dev_mode: Render to the console instead of JSON.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    renderer: Any = (
        structlog.dev.ConsoleRenderer()
        if dev_mode
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


@contextmanager
def log_bind(**kwargs: Any) -> Iterator[None]:
    """Bind key/value pairs to every log event emitted inside the block."""
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield
