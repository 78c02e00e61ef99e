"""
Logging configuration for the shop chat relay.

One package logger, level taken from the LOG_LEVEL setting.
"""
import logging
import sys

from shopchat.config import settings

LOG_LEVEL = settings.LOG_LEVEL.upper()
logger = logging.getLogger("shopchat")
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


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or a child of it when `name` is given."""
    if name:
        return logging.getLogger(f"shopchat.{name}")
    return logger
