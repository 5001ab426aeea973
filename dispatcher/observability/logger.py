"""Logging for dispatcher events (feed lifecycle, subscribe, publish, delivery)."""

import logging
import sys
from typing import Union

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def get_logger(name: str, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Return the named dispatcher logger at `level`.
    Each logger writes to stdout through its own handler and does not
    propagate, so nested names (a feed called "a" and one called "a.b")
    never print the same record twice.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    # level follows the most recent settings for this name
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
