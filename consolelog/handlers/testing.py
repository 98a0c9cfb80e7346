"""Route console handler output into a test framework's log channel."""

from dataclasses import dataclass, field
import logging
from typing import Any, Protocol

from consolelog.handlers.console import ConsoleHandler, ConsoleHandlerOptions, new_logger


class TestingLog(Protocol):
    """The part of a test object the testing output needs.

    ``helper`` marks the calling frame as test infrastructure; ``log``
    records one line of output for the current test.
    """

    def helper(self) -> None: ...

    def log(self, *args: Any) -> None: ...


@dataclass
class CapturedLog:
    """A TestingLog that keeps recorded lines in memory.

    pytest has no per-test log channel to report into, so tests collect the
    lines here and assert on them.
    """

    __test__ = False

    lines: list[str] = field(default_factory=list)
    helper_calls: int = 0

    def helper(self) -> None:
        self.helper_calls += 1

    def log(self, *args: Any) -> None:
        self.lines.append(" ".join(str(arg) for arg in args))


class TestingOutput:
    """Text stream that forwards each write to a TestingLog as one line."""

    __test__ = False

    def __init__(self, tl: TestingLog) -> None:
        self.tl = tl

    def write(self, s: str) -> int:
        self.tl.helper()
        self.tl.log(s.removesuffix("\n"))
        return len(s)

    def flush(self) -> None:
        pass


def testing_output(tl: TestingLog) -> TestingOutput:
    """Return a stream writing to ``tl``."""
    return TestingOutput(tl)


def testing_logger(
    tl: TestingLog,
    level: int | str = logging.DEBUG,
    name: str = "consolelog.testing",
) -> logging.Logger:
    """Return a logger for tests that writes to ``tl``.

    Time and source location are left out of each line since the test
    framework reports them on its own.
    """
    handler = ConsoleHandler(
        testing_output(tl),
        ConsoleHandlerOptions(level=level, remove_time=True, remove_source=True),
    )
    return new_logger(handler, name)


__all__ = ["CapturedLog", "TestingLog", "TestingOutput", "testing_logger", "testing_output"]
