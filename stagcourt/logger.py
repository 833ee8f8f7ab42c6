"""Logging setup for the engine, service and CLI."""

from __future__ import annotations
import logging
import sys

from .config import LoggingConfig

PACKAGE_LOGGER = "stagcourt"


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Every module logs under ``stagcourt.*``, so configuring the package
    logger covers the engine, the service and the bots without touching
    the root logger. Calling this again replaces the handler instead of
    stacking a second one.

    Args:
        config: Level and format; defaults to ``LoggingConfig()``.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    # stdout is kept for CLI output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(config.format, datefmt=config.datefmt))
    logger.addHandler(handler)
    logger.setLevel(config.level)
    return logger
