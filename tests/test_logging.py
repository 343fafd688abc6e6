"""Tests for the console logger."""

import io

import pytest
from chipjax.logging import ConsoleLogger, get_logger


def make_logger(level="INFO"):
    stream = io.StringIO()
    return ConsoleLogger("vm", log_level=level, show_timestamps=False, stream=stream), stream


def test_format_without_colors():
    logger, stream = make_logger()
    logger.info("loaded")
    assert stream.getvalue() == "[    INFO][vm] loaded\n"


def test_level_filtering():
    logger, stream = make_logger("WARNING")
    logger.debug("hidden")
    logger.info("hidden")
    logger.warning("shown")
    logger.critical("shown too")
    assert stream.getvalue().count("shown") == 2
    assert "hidden" not in stream.getvalue()


def test_unknown_level():
    with pytest.raises(ValueError):
        ConsoleLogger(log_level="LOUD")


def test_get_logger_is_cached():
    first = get_logger("cache-test", "DEBUG")
    assert get_logger("cache-test") is first
    assert get_logger("cache-test", "ERROR") is not first
