"""Logging setup shared by the generator and the command line tool."""

from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

PACKAGE_LOGGER = "wit_dartgen"


def get_log_level() -> str:
    """Log level from the environment, defaulting to WARNING."""
    return os.getenv("WIT_DARTGEN_LOG_LEVEL", "WARNING").upper()


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | None = None, use_rich: bool = True) -> None:
    """
    Configure the package logger.

    Args:
        level: Log level name (None reads WIT_DARTGEN_LOG_LEVEL)
        use_rich: Render records through rich instead of a plain stream handler
    """
    if level is None:
        level = get_log_level()

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            show_path=False, rich_tracebacks=True, markup=False
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)-8s] %(name)s - %(message)s")
        )

    logger.addHandler(handler)
    logger.propagate = False
