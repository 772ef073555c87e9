"""Logging setup for the finledger command line."""

import logging
import os
from typing import Optional

LOGGER_NAME = "finledger"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def configure_logging(verbose: bool = False, level: Optional[str] = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    The level is, in order of precedence: ``level``, the FINLEDGER_LOG_LEVEL
    environment variable, DEBUG when ``verbose`` is set, WARNING otherwise.
    Calling this again replaces the handler instead of adding a second one.

    Raises:
        ValueError: If the level name is unknown
    """
    level_name = level or os.getenv("FINLEDGER_LOG_LEVEL")
    if level_name:
        resolved = logging.getLevelName(level_name.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level '{level_name}'")
    else:
        resolved = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)
    for handler in list(logger.handlers):
        if getattr(handler, "_finledger_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._finledger_handler = True
    logger.addHandler(handler)
    # Avoid duplicate lines when the root logger is configured too
    logger.propagate = False
    return logger
