"""Structured logging setup. Read-only config; no business logic."""

import logging
import sys

from hybrid_rag.config.settings import get_settings


def configure_logging(level_name: str | None = None) -> None:
    """Install the stdout handler on the root logger. DEBUG=true forces debug level."""
    settings = get_settings()
    if level_name is None:
        level_name = "DEBUG" if settings.debug else settings.log_level
    level = getattr(logging, level_name.upper(), logging.INFO)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Reduce noise from third parties
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("opensearch").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)
