"""Logging configuration with Rich formatting.

Provides setup_logging() for app initialization and get_logger() for module-level loggers.
"""

import logging
from rich.logging import RichHandler
from .config import get_settings


def log_format(level: str) -> str:
    # At DEBUG each line names its logger (aggregate, fetch, providers)
    if level.upper() == "DEBUG":
        return "%(name)s: %(message)s"
    return "%(message)s"


def setup_logging():
    settings = get_settings()
    level = settings.LOG_LEVEL.upper()
    logging.basicConfig(
        level=level,
        format=log_format(level),
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=level == "DEBUG")]
    )

    # Per-request lines from httpx drown out the provider diagnostics
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str):
    return logging.getLogger(name)
