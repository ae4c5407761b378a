"""
Structured logging for SoulZip.

Log events go to stderr so that stdout carries only calculation results.
Modules get a logger with `structlog.get_logger(__name__)` and emit
event-style messages with key/value context.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

import structlog


DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_ENV = "SOULZIP_LOG_LEVEL"


def resolve_log_level(verbose: bool = False) -> int:
    """Pick the log level from the verbose flag or the environment."""
    if verbose:
        return logging.DEBUG
    
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper() or DEFAULT_LOG_LEVEL
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.WARNING
    return level


def configure_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> None:
    """
    Configure stdlib logging and structlog.
    
    Safe to call more than once; the root handler is replaced each time.
    """
    level = resolve_log_level(verbose)
    
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=level,
        force=True,
    )
    
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
