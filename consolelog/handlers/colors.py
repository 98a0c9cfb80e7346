"""ANSI escape codes and terminal detection for colorized console output.

Colors are disabled when the ``NO_COLOR`` environment variable is set or
when the output stream is not a TTY (e.g. redirected to a file).
"""

from collections.abc import Callable
from dataclasses import dataclass
import logging
from typing import Any

from consolelog.core.config import ColorSettings

# Decides whether a stream is an interactive terminal.
TerminalCheck = Callable[[Any], bool]


@dataclass(frozen=True)
class EscapeCodes:
    """VT100 escape sequences, one per semantic color."""

    red: str = "\033[31m"
    green: str = "\033[32m"
    yellow: str = "\033[33m"
    blue: str = "\033[34m"
    reset: str = "\033[0m"

    def for_level(self, levelno: int) -> str:
        """Return the color of the severity band ``levelno`` falls in."""
        if levelno < logging.INFO:
            return self.blue
        if levelno < logging.WARNING:
            return self.green
        if levelno < logging.ERROR:
            return self.yellow
        return self.red


VT100 = EscapeCodes()


def stream_is_terminal(stream: Any) -> bool:
    """Return True if ``stream`` is a file-like object attached to a TTY."""
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed file
        return False


def resolve_escape_codes(
    stream: Any,
    is_terminal: TerminalCheck | None = None,
    settings: ColorSettings | None = None,
) -> EscapeCodes | None:
    """Resolve the color capability for ``stream``.

    Args:
        stream: Destination stream of the console handler.
        is_terminal: Terminal check to use instead of ``stream_is_terminal``.
        settings: Settings to read ``NO_COLOR`` from; read from the environment when omitted.

    Returns:
        Escape codes when colors should be used, otherwise None.
    """
    if settings is None:
        settings = ColorSettings()
    if settings.color_disabled:
        return None

    check = is_terminal or stream_is_terminal
    if not check(stream):
        return None

    return VT100


__all__ = ["VT100", "EscapeCodes", "TerminalCheck", "resolve_escape_codes", "stream_is_terminal"]
