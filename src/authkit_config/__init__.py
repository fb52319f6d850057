"""Shared authkit configuration package."""

from .logging import configure_logging
from .settings import (
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "Settings",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
