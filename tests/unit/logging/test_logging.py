# tests/unit/logging/test_logging.py — v1
"""Tests for logging/: request context, formatters, rotating handler."""

from __future__ import annotations

import json
import logging

import pytest

from toolcompare.logging.context import (
    clear_context,
    get_context,
    set_cache_key,
    set_request_context,
)
from toolcompare.logging.handlers import create_rotating_handler, parse_size
from toolcompare.logging.logger import JsonFormatter, TextFormatter, get_logger, setup_logging


def _record(msg: str = "Hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )


class TestContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_empty_by_default(self):
        assert get_context().as_dict() == {}

    def test_request_context_resets_cache_key(self):
        set_request_context("r1", "buffered")
        set_cache_key("abc")
        set_request_context("r2")
        ctx = get_context()
        assert ctx.request_id == "r2"
        assert ctx.mode is None
        assert ctx.cache_key is None


class TestFormatters:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_json_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["msg"] == "Hello"
        assert "ts" in parsed
        assert "request_id" not in parsed

    def test_json_with_context(self):
        set_request_context("req-1", "stream")
        set_cache_key("deadbeef")
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["request_id"] == "req-1"
        assert parsed["mode"] == "stream"
        assert parsed["cache_key"] == "deadbeef"

    def test_json_includes_extra_fields(self):
        record = _record()
        record.slugs = ["notion-ai", "jasper"]
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["extra"] == {"slugs": ["notion-ai", "jasper"]}

    def test_text_with_context(self):
        set_request_context("req-2", "buffered")
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "[req-2 buffered]" in output


class TestSetupLogging:
    def test_get_logger_namespaced(self):
        assert get_logger("api").name == "toolcompare.api"

    def test_setup_replaces_handlers(self, tmp_path):
        setup_logging(level="DEBUG", log_format="text")
        root = setup_logging(level="WARNING", log_format="json", log_file=str(tmp_path / "svc.log"))
        assert root.name == "toolcompare"
        assert root.level == logging.WARNING
        assert len(root.handlers) == 2
        for h in root.handlers:
            assert isinstance(h.formatter, JsonFormatter)
        assert logging.getLogger("uvicorn.error").handlers == root.handlers
        for name in ("toolcompare", "uvicorn", "uvicorn.error", "uvicorn.access"):
            logging.getLogger(name).handlers.clear()
            logging.getLogger(name).propagate = True
        root.setLevel(logging.NOTSET)


class TestParseSize:
    def test_units(self):
        assert parse_size("10MB") == 10 * 1024 * 1024
        assert parse_size("512kb") == 512 * 1024
        assert parse_size("1GB") == 1024 ** 3
        assert parse_size("2048") == 2048
        assert parse_size(100) == 100

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size("10bytes")
        with pytest.raises(ValueError):
            parse_size("")


class TestCreateRotatingHandler:
    def test_creates_handler(self, tmp_path):
        handler = create_rotating_handler(tmp_path / "deep" / "svc.log", rotation="1MB", retention=5)
        assert handler.maxBytes == 1024 * 1024
        assert handler.backupCount == 5
        assert (tmp_path / "deep").exists()
        handler.close()
