"""Logging configuration: one console handler on the root logger.

Configure once at process startup. Attach attributes via the extra dict:
    logger.info("message", extra={"key": value})
or bind them with structlog after calling configure_structlog().
"""

import logging
import sys
from typing import Any

import structlog

from consolelog.core.config import Settings, get_settings
from consolelog.handlers.console import ConsoleHandler, ConsoleHandlerOptions

# Third-party loggers: always WARNING so they don't flood output regardless of app level.
THIRD_PARTY_LOGGER_LEVELS: dict[str, str] = {
    "asyncio": "WARNING",
    "urllib3": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
}


def _to_level(level: str | int) -> int:
    return level if isinstance(level, int) else getattr(logging, level.upper())


def configure_logging(
    level: str | int | None = None,
    *,
    stream: Any = None,
    logger_levels: dict[str, str | int] | None = None,
    settings: Settings | None = None,
) -> ConsoleHandler:
    """Configure root logger. Call once at process startup.

    Args:
        level: Root logger level (e.g. "INFO", logging.INFO); defaults to the LOG_LEVEL setting.
        stream: Output stream; defaults to sys.stderr.
        logger_levels: Optional mapping of logger names to levels.
        settings: Settings to use instead of the cached environment settings.

    Returns:
        The console handler installed on the root logger.
    """
    if settings is None:
        settings = get_settings()
    if level is None:
        level = settings.log_level
    if stream is None:
        stream = sys.stderr

    root = logging.getLogger()
    root.setLevel(_to_level(level))
    root.handlers.clear()

    handler = ConsoleHandler(
        stream,
        ConsoleHandlerOptions(
            level=root.level,
            remove_time=settings.log_remove_time,
            remove_level=settings.log_remove_level,
            remove_source=settings.log_remove_source,
        ),
        settings=settings,
    )
    root.addHandler(handler)

    levels = {**THIRD_PARTY_LOGGER_LEVELS, **(logger_levels or {})}
    for name, lvl in levels.items():
        logging.getLogger(name).setLevel(_to_level(lvl))

    return handler


def configure_structlog() -> None:
    """Send structlog events through the standard library loggers.

    Bound keys become ``extra`` fields of the LogRecord, so the console
    handler renders them as attributes.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.render_to_log_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


__all__ = [
    "THIRD_PARTY_LOGGER_LEVELS",
    "configure_logging",
    "configure_structlog",
]
