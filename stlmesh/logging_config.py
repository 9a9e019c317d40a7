"""Logging setup for the ``stlmesh`` package logger."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

LOGGER_NAME = "stlmesh"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    """Route ``stlmesh`` log records to stdout and optionally a file.

    Loader rejections are only logged at DEBUG, so ``verbose`` is what makes
    the ASCII/binary fallback visible. Calling this again replaces the
    handlers installed by a previous call.
    """

    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
