"""
Tests for the category logger
"""

import io

import pytest

from utils.logger import Logger, get_logger, configure_logger, get_category_logger
from models.enums import LogLevel, LogCategory


@pytest.fixture
def logger():
    log = Logger(min_level=LogLevel.DEBUG, use_colors=False)
    log.stream = io.StringIO()
    return log


def lines(logger):
    return logger.stream.getvalue().splitlines()


def test_message_with_details(logger):
    logger.info(LogCategory.STREAM, "Reconnecting", delay="1.0s", attempt=3)

    out = lines(logger)
    assert out[0].endswith("STREAM    ✓ Reconnecting")
    assert out[1].strip() == "├─ delay: 1.0s"
    assert out[2].strip() == "└─ attempt: 3"


def test_level_filtering(logger):
    logger.min_level = LogLevel.WARN

    logger.info(LogCategory.COLOR, "hidden")
    logger.error(LogCategory.COLOR, "shown")

    out = lines(logger)
    assert len(out) == 1
    assert "✗ shown" in out[0]


def test_bound_logger_uses_its_category(logger):
    bound = logger.for_category(LogCategory.HARDWARE)

    bound.warn("LED strip missing")
    bound.with_category(LogCategory.SHUTDOWN).debug("LEDs off")

    out = lines(logger)
    assert "HARDWARE  ⚠ LED strip missing" in out[0]
    assert "SHUTDOWN  · LEDs off" in out[1]


def test_exc_info_appends_traceback(logger):
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.error(LogCategory.SYSTEM, "Fatal error", exc_info=True)

    text = logger.stream.getvalue()
    assert "Traceback" in text
    assert "RuntimeError: boom" in text


def test_no_colors_when_disabled(logger):
    logger.info(LogCategory.CONFIG, "plain")

    assert "\033[" not in logger.stream.getvalue()


def test_configure_logger_keeps_singleton():
    original = get_logger()
    previous = original.min_level
    try:
        configure_logger(LogLevel.DEBUG)

        assert get_logger() is original
        assert get_logger().min_level == LogLevel.DEBUG
        assert get_category_logger(LogCategory.TASK)._base is original
    finally:
        configure_logger(previous)
