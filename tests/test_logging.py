"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from habitdesk.config import TestConfig
from habitdesk.logging_config import JSONFormatter, get_logger, setup_logging


def _record(level=logging.INFO, msg="Test message", exc_info=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    return record


def test_json_formatter():
    """Test that JSONFormatter correctly formats log records."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_exception():
    """Test that JSONFormatter correctly handles exceptions."""
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record(logging.ERROR, "Error occurred", exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_includes_extra_fields():
    """Dates and other non-JSON values in ``extra`` are stringified."""
    from datetime import date

    record = _record()
    record.habit_key = "stretch"
    record.day = date(2026, 3, 21)

    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["extra"] == {"habit_key": "stretch", "day": "2026-03-21"}


def test_setup_logging(tmp_path):
    """Test that logging setup creates a rotating JSON log file."""
    config = TestConfig(data_dir=tmp_path)

    logger = setup_logging(config)

    assert logger.name == "habitdesk"
    assert len(logger.handlers) == 2  # Console + File

    log_file = tmp_path / "logs" / "habitdesk.log"
    assert log_file.exists()

    get_logger("tracker").info("Habit completed", extra={"habit_key": "stretch"})

    lines = [line for line in log_file.read_text().splitlines() if line.strip()]
    assert len(lines) >= 2
    entries = [json.loads(line) for line in lines]
    assert entries[0]["message"] == "Logging initialized"
    assert entries[-1]["logger"] == "habitdesk.tracker"
    assert entries[-1]["extra"]["habit_key"] == "stretch"


def test_setup_logging_twice_does_not_duplicate_handlers(tmp_path):
    config = TestConfig(data_dir=tmp_path)
    setup_logging(config)
    logger = setup_logging(config)
    assert len(logger.handlers) == 2


def test_get_logger():
    """Test that get_logger returns properly namespaced loggers."""
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")

    assert logger1.name == "habitdesk.module1"
    assert logger2.name == "habitdesk.module2"
    assert logger1 != logger2
    assert get_logger("habitdesk.tracker").name == "habitdesk.tracker"


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(tmp_path, dev_mode):
    """Test that console logging level adjusts based on dev mode."""
    config = TestConfig(data_dir=tmp_path)
    config.DEV_MODE = dev_mode

    logger = setup_logging(config)

    console_handler = None
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, logging.handlers.RotatingFileHandler
        ):
            console_handler = handler
            break

    assert console_handler is not None

    expected_level = logging.INFO if dev_mode else logging.WARNING
    assert console_handler.level == expected_level
