"""Tests for the JSON log formatter and logging setup."""

from __future__ import annotations

import json
import logging
import sys

import pytest
from deploy_sql.config import Settings
from deploy_sql.logging_config import JSONFormatter, configure_logging


@pytest.fixture
def formatter() -> JSONFormatter:
    return JSONFormatter()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str = "test message", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="deploy_sql.backends.mysql",
        level=logging.DEBUG,
        pathname="mysql.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_basic_format(self, formatter: JSONFormatter) -> None:
        data = json.loads(formatter.format(_record()))

        assert data["level"] == "DEBUG"
        assert data["logger"] == "deploy_sql.backends.mysql"
        assert data["message"] == "test message"
        assert "timestamp" in data
        assert "connection" not in data

    def test_single_line_output(self, formatter: JSONFormatter) -> None:
        assert "\n" not in formatter.format(_record("multi\nline"))

    def test_connection_context_included(self, formatter: JSONFormatter) -> None:
        record = _record(connection={"name": "mysql://db1:3306/orders", "type": "mysql"})
        data = json.loads(formatter.format(record))
        assert data["connection"] == {"name": "mysql://db1:3306/orders", "type": "mysql"}

    def test_exception_included(self, formatter: JSONFormatter) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()
        data = json.loads(formatter.format(record))
        assert "RuntimeError: boom" in data["exc_info"]


class TestConfigureLogging:
    def test_structured_handler(self, restore_root_logger: logging.Logger) -> None:
        configure_logging(Settings(structured_logging=True))
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
        assert restore_root_logger.level == logging.INFO

    def test_text_handler(self, restore_root_logger: logging.Logger) -> None:
        configure_logging(Settings(log_level="warning"))
        assert not isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
        assert restore_root_logger.level == logging.WARNING

    def test_debug_forces_debug_level(self, restore_root_logger: logging.Logger) -> None:
        configure_logging(Settings(debug=True))
        assert restore_root_logger.level == logging.DEBUG
