"""Human-readable, optionally colorized console output for standard library logging."""

from consolelog.core import ColorSettings, Settings, configure_logging, configure_structlog, get_settings
from consolelog.handlers import (
    AttributeSerializationError,
    ConsoleHandler,
    ConsoleHandlerOptions,
    Handler,
    new_logger,
)

__all__ = [
    "AttributeSerializationError",
    "ColorSettings",
    "ConsoleHandler",
    "ConsoleHandlerOptions",
    "Handler",
    "Settings",
    "configure_logging",
    "configure_structlog",
    "get_settings",
    "new_logger",
]
