"""Tests for logging setup."""

import logging

import pytest
import structlog
from pythonjsonlogger import jsonlogger
from structlog.contextvars import get_contextvars

from sketchui.core.logging_config import QUIET_LOGGERS, LogContext, configure_logging, get_logger


@pytest.fixture
def restore_logging():
    yield
    structlog.reset_defaults()
    logging.basicConfig(level=logging.WARNING, force=True)


@pytest.mark.unit
def test_log_context_nests():
    with LogContext(batch_id="batch_outer"):
        with LogContext(batch_id="batch_inner", session_id="session_1"):
            assert get_contextvars() == {"batch_id": "batch_inner", "session_id": "session_1"}
        assert get_contextvars() == {"batch_id": "batch_outer"}

    assert "batch_id" not in get_contextvars()


@pytest.mark.unit
def test_json_logging(restore_logging):
    configure_logging("debug", json_logs=True)

    (handler,) = logging.getLogger().handlers
    assert isinstance(handler.formatter, jsonlogger.JsonFormatter)
    assert logging.getLogger().level == logging.DEBUG
    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


@pytest.mark.unit
def test_unknown_level_means_info(restore_logging):
    configure_logging("chatty")

    assert logging.getLogger().level == logging.INFO
    get_logger(__name__).info("logging_configured", level="chatty")
