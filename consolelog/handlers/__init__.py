"""Log handlers: console output and its testing adapter."""

from consolelog.handlers.attrs import AttributeSerializationError, GroupOrAttrs
from consolelog.handlers.colors import EscapeCodes, resolve_escape_codes, stream_is_terminal
from consolelog.handlers.console import (
    ConsoleHandler,
    ConsoleHandlerOptions,
    Handler,
    format_time,
    new_logger,
    short_path,
)
from consolelog.handlers.testing import (
    CapturedLog,
    TestingLog,
    TestingOutput,
    testing_logger,
    testing_output,
)

__all__ = [
    "AttributeSerializationError",
    "CapturedLog",
    "ConsoleHandler",
    "ConsoleHandlerOptions",
    "EscapeCodes",
    "GroupOrAttrs",
    "Handler",
    "TestingLog",
    "TestingOutput",
    "format_time",
    "new_logger",
    "resolve_escape_codes",
    "short_path",
    "stream_is_terminal",
    "testing_logger",
    "testing_output",
]
