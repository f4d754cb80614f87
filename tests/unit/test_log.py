"""Unit tests for functions defined in src/log.py."""

import logging

from rich.logging import RichHandler

from log import get_logger, set_verbosity


def test_get_logger():
    """Check the function to retrieve logger."""
    logger_name = "foo"
    logger = get_logger(logger_name)
    assert logger is not None
    assert logger.name == logger_name

    # at least one handler need to be set
    assert len(logger.handlers) >= 1
    assert isinstance(logger.handlers[0], RichHandler)


def test_get_logger_twice():
    """Check that handlers are not duplicated."""
    get_logger("bar")
    logger = get_logger("bar")
    assert len(logger.handlers) == 1


def test_set_verbosity():
    """Check the function to change root logger level."""
    root = logging.getLogger()
    original = root.level
    try:
        set_verbosity(True)
        assert root.level == logging.DEBUG
        set_verbosity(False)
        assert root.level == logging.INFO
    finally:
        set_verbosity(True)
        root.setLevel(original)


def test_set_verbosity_service_loggers():
    """Check that level is applied to existing and new service loggers."""
    root = logging.getLogger()
    original = root.level
    existing = get_logger("verbosity.existing")
    assert existing.level == logging.DEBUG
    try:
        set_verbosity(False)
        assert existing.level == logging.INFO
        assert get_logger("verbosity.new").level == logging.INFO
        assert not existing.isEnabledFor(logging.DEBUG)

        set_verbosity(True)
        assert existing.level == logging.DEBUG
        assert get_logger("verbosity.new").level == logging.DEBUG
    finally:
        set_verbosity(True)
        root.setLevel(original)
