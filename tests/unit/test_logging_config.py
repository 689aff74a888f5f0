"""Tests for logging setup and the JSON formatter."""

import json
import logging

import pytest

from src.utils import get_logger
from src.utils.logging_config import JsonFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestJsonFormatter:
    def test_includes_extra_fields(self):
        record = logging.LogRecord("cover", logging.INFO, __file__, 1, "Composed %s", ("doc",), None)
        record.document_id = 42

        payload = json.loads(JsonFormatter().format(record))

        assert payload["message"] == "Composed doc"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "cover"
        assert payload["document_id"] == 42
        assert "msg" not in payload

    def test_includes_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys

            record = logging.LogRecord("cover", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

        payload = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in payload["exception"]


class TestSetupLogging:
    def test_stream_handler_only(self, restore_root_logger):
        setup_logging(level="debug")
        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert logging.getLogger("pypdf").level == logging.ERROR

    def test_rotating_file_handler(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "app.log"
        setup_logging(log_format="json", log_file=str(log_file))

        logging.getLogger("cover.test").info("hello", extra={"document_id": 1})
        for handler in restore_root_logger.handlers:
            handler.flush()

        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["document_id"] == 1


def test_get_logger_returns_named_logger():
    assert get_logger("src.services.cover") is logging.getLogger("src.services.cover")
