"""Tests for routing console output into a test log."""

import logging

from consolelog.handlers import testing


def test_write_strips_one_trailing_newline(captured_log) -> None:
    """Exactly one trailing newline is removed before logging."""
    out = testing.testing_output(captured_log)
    assert out.write("hello\n") == len("hello\n")
    assert out.write("two\n\n") == len("two\n\n")
    assert out.write("none") == 4
    assert captured_log.lines == ["hello", "two\n", "none"]


def test_write_marks_helper_frame(captured_log) -> None:
    """Every write marks the calling frame as test infrastructure."""
    out = testing.testing_output(captured_log)
    out.write("a\n")
    out.write("b\n")
    assert captured_log.helper_calls == 2


def test_testing_logger_leaves_out_time_and_source(captured_log) -> None:
    """Test lines only have level, message and attributes."""
    logger = testing.testing_logger(captured_log, logging.INFO)
    logger.info("started", extra={"port": 8080})
    assert captured_log.lines == ['INFO\tstarted\t{"port":8080}']


def test_testing_logger_honors_level(captured_log) -> None:
    """Records below the given level are not logged."""
    logger = testing.testing_logger(captured_log, "WARNING")
    logger.info("quiet")
    logger.warning("loud")
    assert captured_log.lines == ["WARNING\tloud"]


def test_testing_logger_defaults_to_debug(captured_log) -> None:
    """Tests see debug output unless they ask otherwise."""
    logger = testing.testing_logger(captured_log)
    logger.debug("details")
    assert captured_log.lines == ["DEBUG\tdetails"]


def test_testing_logger_ignores_log_level_environment(captured_log, monkeypatch) -> None:
    """A lower-case LOG_LEVEL in the environment does not break test loggers."""
    monkeypatch.setenv("LOG_LEVEL", "info")
    logger = testing.testing_logger(captured_log, logging.INFO)
    logger.info("ok")
    assert captured_log.lines == ["INFO\tok"]


def test_testing_logger_is_never_colorized(captured_log) -> None:
    """The test output is not a terminal."""
    logger = testing.testing_logger(captured_log, logging.DEBUG)
    logger.error("boom")
    assert "\033[" not in captured_log.lines[0]


def test_derived_test_handler_writes_to_same_log(captured_log) -> None:
    """Handlers derived from the test logger's handler share its output."""
    logger = testing.testing_logger(captured_log, logging.INFO)
    handler = logger.handlers[0].with_group("req").with_attrs({"id": 7})
    child = logging.Logger("child")
    child.addHandler(handler)
    child.info("served")
    logger.info("plain")
    assert captured_log.lines == ['INFO\tserved\t{"req":{"id":7}}', "INFO\tplain"]


def test_captured_log_joins_arguments() -> None:
    """log(*args) records the arguments joined by spaces."""
    tl = testing.CapturedLog()
    tl.log("a", 1, None)
    assert tl.lines == ["a 1 None"]
