"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Generator
from datetime import datetime, timezone
from io import StringIO
import logging
from typing import Any

import pytest

from consolelog.core import get_settings
from consolelog.handlers.testing import CapturedLog

# 2024-01-02T03:04:05.000Z
FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc).timestamp()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Run every test without NO_COLOR and with fresh cached settings."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def stream() -> StringIO:
    """In-memory output stream (never a TTY)."""
    return StringIO()


@pytest.fixture
def captured_log() -> CapturedLog:
    """TestingLog that keeps recorded lines."""
    return CapturedLog()


@pytest.fixture
def make_record() -> Callable[..., logging.LogRecord]:
    """Build log records with a fixed creation time and optional extras."""

    def _make(
        msg: str = "started",
        *,
        level: int = logging.INFO,
        pathname: str = "/srv/app/main.py",
        lineno: int = 42,
        created: float | None = FIXED_TIME,
        args: tuple[Any, ...] = (),
        **extra: Any,
    ) -> logging.LogRecord:
        record = logging.LogRecord(
            name="test.logger",
            level=level,
            pathname=pathname,
            lineno=lineno,
            msg=msg,
            args=args,
            exc_info=None,
        )
        if created is not None:
            record.created = created
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    return _make
