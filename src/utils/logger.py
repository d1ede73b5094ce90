"""
Logger Module

Logging setup for the application. Modules log through the standard library;
the root handler renders every record with structlog, as JSON lines or as
plain console text.
"""

import logging
import sys
from typing import Any, List

import structlog

# Third-party loggers that are too chatty below WARNING
NOISY_LOGGERS = ('kubernetes', 'urllib3')


def build_formatter(fmt: str = 'json') -> structlog.stdlib.ProcessorFormatter:
    """
    Build the structlog formatter for the root handler.

    Args:
        fmt: 'json' or 'text'

    Returns:
        ProcessorFormatter rendering stdlib records
    """
    shared_processors: List[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if fmt == 'json':
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=False)]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderers,
        ],
    )


def setup_logging(level: str = 'info', fmt: str = 'json') -> logging.Logger:
    """
    Configure the root logger.

    Args:
        level: Level name, case-insensitive
        fmt: 'json' or 'text'

    Returns:
        The root logger
    """
    level_int = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(build_formatter(fmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level_int)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level_int if level_int <= logging.DEBUG else logging.WARNING)

    return root
