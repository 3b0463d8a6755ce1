"""Tests for observability utilities."""

import json
import logging

from johotel.observability.correlation import correlation_scope, get_correlation_id
from johotel.observability.logging import JsonFormatter, get_logger


def _record(msg="hello", **extra):
    record = logging.LogRecord("johotel.test", logging.INFO, __file__, 1, msg, None, None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


class TestCorrelationScope:
    def test_generates_id_when_missing(self):
        with correlation_scope() as cid:
            assert cid
            assert get_correlation_id() == cid
        assert get_correlation_id() == ""

    def test_uses_given_id(self):
        with correlation_scope("abc-123") as cid:
            assert cid == "abc-123"

    def test_restores_previous_on_error(self):
        with correlation_scope("outer"):
            try:
                with correlation_scope("inner"):
                    raise RuntimeError
            except RuntimeError:
                pass
            assert get_correlation_id() == "outer"


class TestJsonFormatter:
    def test_basic_fields(self):
        out = json.loads(JsonFormatter().format(_record()))

        assert out["message"] == "hello"
        assert out["level"] == "INFO"
        assert out["logger"] == "johotel.test"
        assert "timestamp" in out
        assert "correlationId" not in out

    def test_includes_correlation_id(self):
        with correlation_scope("cid-1"):
            out = json.loads(JsonFormatter().format(_record()))

        assert out["correlationId"] == "cid-1"

    def test_merges_extra_fields(self):
        out = json.loads(JsonFormatter().format(_record(extra_fields={"room_id": 3})))

        assert out["room_id"] == 3


class TestGetLogger:
    def test_single_handler(self):
        logger = get_logger("johotel.test.single")
        get_logger("johotel.test.single")

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        assert get_logger("johotel.test.level").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        assert get_logger("johotel.test.unknown").level == logging.INFO
