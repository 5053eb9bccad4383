"""Tests for logging setup."""

import logging

import pytest

from calculator.exceptions import ParameterError
from calculator.log import HANDLER_NAME, configure_logging
from calculator.routes import app


@pytest.fixture
def calculator_logger():
    logger = logging.getLogger("calculator")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_configure_logging_is_idempotent(calculator_logger):
    """Test that repeated calls add a single named handler."""
    logger = configure_logging("debug")
    configure_logging("WARNING")

    assert logger is calculator_logger
    assert [h.get_name() for h in logger.handlers].count(HANDLER_NAME) == 1
    assert logger.level == logging.WARNING


def test_rejected_operand_is_logged(caplog):
    """Test that bad operands are logged at WARNING."""
    with caplog.at_level(logging.WARNING, logger="calculator"):
        with pytest.raises(ParameterError):
            app.dispatch("GET", "/add/abc/1")

    assert any("Rejected parameter a='abc'" in r.getMessage() for r in caplog.records)


def test_dispatch_is_logged_at_debug(caplog):
    """Test that dispatch logs the matched route at DEBUG."""
    with caplog.at_level(logging.DEBUG, logger="calculator"):
        app.dispatch("GET", "/add/2/3")

    records = [r for r in caplog.records if r.levelno == logging.DEBUG]
    assert any("Dispatching GET /add/2/3 -> add" in r.getMessage() for r in records)
