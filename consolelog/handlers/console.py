"""Console handler: one human-readable, tab-separated line per log record.

Output example (colors stripped):
    2024-01-02T03:04:05.000Z	INFO	app/main.py:42	started	{"port":8080}

The format is intended to be easier to read than JSON lines. It is not stable.
"""

from collections.abc import Iterable, Mapping
import copy
from datetime import datetime, tzinfo
import logging
import os
import sys
from typing import Any, Protocol, TextIO

from pydantic import BaseModel, ConfigDict, field_validator

from consolelog.handlers.attrs import (
    GroupOrAttrs,
    encode_attrs,
    merge_attrs,
    record_attrs,
    to_pairs,
)
from consolelog.core.config import ColorSettings
from consolelog.handlers.colors import EscapeCodes, TerminalCheck, resolve_escape_codes

# Keys of the test-capture map.
TIME_KEY = "time"
LEVEL_KEY = "level"
SOURCE_KEY = "source"
MESSAGE_KEY = "msg"

# Set by logging.LogRecord when the caller could not be found.
_UNKNOWN_FILE = "(unknown file)"


class Handler(Protocol):
    """Pluggable back end for a logger front-end."""

    def enabled(self, level: int) -> bool: ...

    def handle(self, record: logging.LogRecord) -> Any: ...

    def with_attrs(self, attrs: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> "Handler": ...

    def with_group(self, name: str) -> "Handler": ...


class ConsoleHandlerOptions(BaseModel):
    """Options of a ConsoleHandler. Immutable once the handler is built."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    level: int | None = None
    remove_time: bool = False
    remove_level: bool = False
    remove_source: bool = False
    tz: tzinfo | None = None  # local time when None

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            level = logging.getLevelName(value.strip().upper())
            if not isinstance(level, int):
                raise ValueError(f"unknown log level: {value!r}")
            return level
        return value

    @property
    def min_level(self) -> int:
        """Minimum enabled level, INFO when not configured."""
        return logging.INFO if self.level is None else self.level


def format_time(created: float, tz: tzinfo | None = None) -> str:
    """Format a record creation time with millisecond precision.

    A zero UTC offset is written as ``Z``, any other offset as ``+HHMM``.
    """
    if tz is None:
        dt = datetime.fromtimestamp(created).astimezone()
    else:
        dt = datetime.fromtimestamp(created, tz=tz)

    zone = "Z" if not dt.utcoffset() else dt.strftime("%z")
    return f"{dt.strftime('%Y-%m-%dT%H:%M:%S')}.{dt.microsecond // 1000:03d}{zone}"


def short_path(path: str) -> str:
    """Return ``<parent-dir>/<file>`` for the given path.

    The parent is dropped when it is the filesystem root.
    """
    if not path:
        raise ValueError("empty path")

    parent = os.path.basename(os.path.dirname(path))
    name = os.path.basename(path)
    if not parent:
        return name
    return f"{parent}/{name}"


class ConsoleHandler(logging.Handler):
    """A logging handler that writes human-readable lines to a stream.

    If the stream is a TTY, levels are colorized. Setting the ``NO_COLOR``
    environment variable disables colors.

    Handlers derived with ``with_attrs`` or ``with_group`` share the stream
    and its lock with their ancestor, so lines from the whole family never
    interleave. Rendering happens outside the lock; only the write is serialized.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        opts: ConsoleHandlerOptions | None = None,
        *,
        is_terminal: TerminalCheck | None = None,
        test_attrs: dict[str, Any] | None = None,
        settings: ColorSettings | None = None,
    ) -> None:
        """Initialize the console handler.

        Args:
            stream: Output stream; defaults to sys.stderr.
            opts: Handler options.
            is_terminal: Check used to decide whether the stream is a TTY.
            test_attrs: When set, every rendered field is also stored here (tests only, not thread-safe).
            settings: Settings holding the NO_COLOR switch; read from the environment when omitted.
        """
        self.opts = opts or ConsoleHandlerOptions()
        super().__init__(self.opts.min_level)

        self.stream = sys.stderr if stream is None else stream
        self.esc: EscapeCodes | None = resolve_escape_codes(self.stream, is_terminal, settings)
        self.test_attrs = test_attrs
        self._chain: tuple[GroupOrAttrs, ...] = ()

    def __repr__(self) -> str:
        name = str(getattr(self.stream, "name", ""))
        if name:
            name += " "
        return f"<{self.__class__.__name__} {name}({logging.getLevelName(self.level)})>"

    def enabled(self, level: int) -> bool:
        """Return True if records of ``level`` are rendered."""
        return level >= self.level

    def handle(self, record: logging.LogRecord) -> Any:
        """Filter and emit the record.

        Unlike ``logging.Handler.handle``, the lock is not held while the
        line is rendered; ``emit`` takes it for the write only.
        """
        rv = self.filter(record)
        if isinstance(rv, logging.LogRecord):
            record = rv
        if rv:
            self.emit(record)
        return rv

    def emit(self, record: logging.LogRecord) -> None:
        """Render the record and write it to the stream as one line."""
        try:
            line = self.render(record)
            with self.lock:
                self.stream.write(line)
                self.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        """Flush the stream."""
        with self.lock:
            if self.stream and hasattr(self.stream, "flush"):
                self.stream.flush()

    def render(self, record: logging.LogRecord) -> str:
        """Render the record as a newline-terminated line.

        Fields are time, level, source, message and attributes, separated by
        tabs. Disabled or empty fields are left out together with their tab.

        Raises:
            AttributeSerializationError: If the attributes cannot be encoded.
        """
        fields: list[str] = []

        if not self.opts.remove_time and record.created:
            t = format_time(record.created, self.opts.tz)
            fields.append(t)
            self._capture(TIME_KEY, t)

        if not self.opts.remove_level:
            fields.append(self.colorized_level(record.levelno, record.levelname))
            self._capture(LEVEL_KEY, record.levelname)

        if not self.opts.remove_source and record.pathname and record.pathname != _UNKNOWN_FILE:
            s = f"{short_path(record.pathname)}:{record.lineno}"
            fields.append(s)
            self._capture(SOURCE_KEY, s)

        msg = record.getMessage()
        if msg:
            fields.append(msg)
            self._capture(MESSAGE_KEY, msg)

        attrs = merge_attrs(self._chain, record_attrs(record))
        if attrs:
            fields.append(encode_attrs(attrs))
            if self.test_attrs is not None:
                self.test_attrs.update(attrs)

        return "\t".join(fields) + "\n"

    def with_attrs(self, attrs: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> "ConsoleHandler":
        """Return a handler that adds ``attrs`` to every record.

        Returns self when there is nothing to add.
        """
        pairs = to_pairs(attrs)
        if not pairs:
            return self
        return self._derive(GroupOrAttrs(attrs=pairs))

    def with_group(self, name: str) -> "ConsoleHandler":
        """Return a handler that nests all attributes added later under ``name``.

        Returns self for an empty name.
        """
        if not name:
            return self
        return self._derive(GroupOrAttrs(group=name))

    def colorized_level(self, levelno: int, levelname: str) -> str:
        """Return the level name wrapped in the color of its severity band.

        The plain name is returned when the handler cannot print colors.
        """
        if self.esc is None:
            return levelname
        return f"{self.esc.for_level(levelno)}{levelname}{self.esc.reset}"

    def _derive(self, entry: GroupOrAttrs) -> "ConsoleHandler":
        # Shares opts, esc, stream, lock and test_attrs; the chain is a new tuple.
        derived = copy.copy(self)
        derived.filters = list(self.filters)
        derived._chain = (*self._chain, entry)
        return derived

    def _capture(self, key: str, value: str) -> None:
        if self.test_attrs is not None:
            self.test_attrs[key] = value


def new_logger(handler: logging.Handler, name: str = "consolelog") -> logging.Logger:
    """Return a logger whose only handler is ``handler``.

    The logger is not registered with ``logging.getLogger``, so each derived
    handler can get its own front-end without touching the global hierarchy.
    """
    logger = logging.Logger(name)
    logger.addHandler(handler)
    logger.setLevel(handler.level)
    logger.propagate = False
    return logger


__all__ = [
    "LEVEL_KEY",
    "MESSAGE_KEY",
    "SOURCE_KEY",
    "TIME_KEY",
    "ConsoleHandler",
    "ConsoleHandlerOptions",
    "Handler",
    "format_time",
    "new_logger",
    "short_path",
]
