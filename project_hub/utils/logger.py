"""Logging configuration for the Project Hub dashboard."""

import logging
import sys
from typing import Union

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def resolve_level(level: Union[int, str, None] = None) -> int:
    """Numeric level from 10 / 'debug' / None (LOG_LEVEL); unknown names give INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level or LOG_LEVEL).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str, level: Union[int, str, None] = None) -> logging.Logger:
    """
    Logger writing to stdout. Streamlit re-executes modules on every rerun,
    so the handler is attached once per name.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(resolve_level(level))
    elif level is not None:
        logger.setLevel(resolve_level(level))
    return logger
