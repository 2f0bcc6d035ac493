"""
Logging setup for the catalog API.

All modules log through children of the ``catalog`` logger.
"""
import logging
import os
import sys
from typing import Optional

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logger = logging.getLogger("catalog")
logger.setLevel(LOG_LEVEL)

if not logger.handlers:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(LOG_LEVEL)

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

logger.propagate = False


def set_level(level: str) -> None:
    logger.setLevel(level.upper())
    for handler in logger.handlers:
        handler.setLevel(level.upper())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the ``catalog`` logger, or ``catalog.<name>`` when a name is given."""
    if name:
        return logging.getLogger(f"catalog.{name}")
    return logger
