"""Core: settings and process-wide logging setup."""

from consolelog.core.config import ColorSettings, Settings, get_settings
from consolelog.core.logging import configure_logging, configure_structlog

__all__ = [
    "ColorSettings",
    "Settings",
    "configure_logging",
    "configure_structlog",
    "get_settings",
]
