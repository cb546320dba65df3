"""
Tests for logging utilities.
"""

import json
import logging
import sys

import pytest

from gdoc_extractor.utils.logging import (
    LogContext,
    StructuredFormatter,
    context_filter,
    log_performance,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    context_filter.clear_context()


class TestLogContext:
    """Test temporary logging context."""

    def test_nested_context_restores_outer_value(self):
        with LogContext(document_id="doc1"):
            with LogContext(document_id="doc2", image_key="k"):
                assert context_filter.context == {"document_id": "doc2", "image_key": "k"}
            assert context_filter.context == {"document_id": "doc1"}
        assert context_filter.context == {}

    def test_context_is_added_to_records(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)

        with LogContext(document_id="doc1"):
            context_filter.filter(record)

        assert record.document_id == "doc1"


class TestStructuredLogging:
    """Test the JSON file output."""

    def test_file_handler_writes_json(self, tmp_path):
        log_file = tmp_path / "logs" / "extractor.log"
        setup_logging(log_level="INFO", log_file_path=log_file)

        with LogContext(document_id="doc1"):
            logging.getLogger("gdoc_extractor.test").info("Processing")

        lines = log_file.read_text(encoding="utf-8").splitlines()
        entry = json.loads(lines[-1])
        assert entry["message"] == "Processing"
        assert entry["level"] == "INFO"
        assert entry["document_id"] == "doc1"

    def test_formatter_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                "test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )

        entry = json.loads(StructuredFormatter().format(record))
        assert "ValueError: boom" in entry["exception"]


class TestLogPerformance:
    """Test the timing decorator."""

    def test_returns_result(self):
        @log_performance
        def add(a, b):
            return a + b

        assert add(1, 2) == 3
        assert add.__name__ == "add"

    def test_reraises(self, caplog):
        @log_performance
        def broken():
            raise RuntimeError("bad")

        with caplog.at_level(logging.ERROR), pytest.raises(RuntimeError):
            broken()

        assert "Failed broken" in caplog.text
