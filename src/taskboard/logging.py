"""structlog setup for the API server and for programs built on the client package."""

import logging
import sys
from typing import TextIO

import structlog

# Child loggers such as pymongo.topology inherit these levels
NOISY_LOGGERS = ("pymongo", "httpx", "httpcore")


def resolve_level(debug: bool, level: str | None = None) -> int:
    """An explicit level name wins; otherwise DEBUG in debug mode and INFO outside it."""
    if level:
        return logging.getLevelNamesMapping()[level.upper()]
    return logging.DEBUG if debug else logging.INFO


def setup_logging(debug: bool, level: str | None = None) -> None:
    """Configure logging for the API server.

    Debug mode renders colored console lines, production renders one JSON object per event.
    """
    _configure(resolve_level(debug, level), sys.stdout)
    renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()
    _configure_structlog(renderer)


def setup_client_logging(verbose: bool = False) -> None:
    """Configure logging for a client program.

    Client output goes to stderr as plain console lines. Only warnings show unless `verbose`,
    which also reveals session transitions and discarded stale responses.
    """
    _configure(logging.DEBUG if verbose else logging.WARNING, sys.stderr)
    _configure_structlog(structlog.dev.ConsoleRenderer(colors=False))


def _configure(level: int, stream: TextIO) -> None:
    logging.basicConfig(format="%(message)s", stream=stream)
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _configure_structlog(renderer: structlog.types.Processor) -> None:
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
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
