"""Logging setup for processes that embed authkit."""

import logging
import sys
from functools import lru_cache

from authkit_config.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

AUTHKIT_LOGGERS = (
    "authkit_core",
    "authkit_tokens",
    "authkit_local",
    "authkit_social",
    "authkit_cli",
)

NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "aiosqlite")


@lru_cache()
def configure_logging(level: str | None = None) -> None:
    """Configure root logging once per level.

    Sets up console logging with:
    - Timestamps, level and module names
    - The configured level for authkit packages (``log_level`` setting
      unless ``level`` is given)
    - WARNING level for noisy third-party libraries
    """
    level_name = (level or get_settings().log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    for name in AUTHKIT_LOGGERS:
        logging.getLogger(name).setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
