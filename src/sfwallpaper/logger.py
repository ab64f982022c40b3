"""Console logging setup for the sfwallpaper package."""

from __future__ import annotations

import logging
import sys

_LOGGER_NAME = "sfwallpaper"
_DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure(level: int | str = logging.INFO, log_format: str = _DEFAULT_FORMAT) -> logging.Logger:
    """(Re)configure the package logger to write progress lines to stdout."""

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(log_format, datefmt=_DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
