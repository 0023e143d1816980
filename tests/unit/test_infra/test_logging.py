"""Unit tests for structured logging helpers."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from video_service.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    LazyString,
    clear_log_context,
    get_lazy_logger,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)


def _record(msg: str = "Video created", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="video_service.features.videos.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=None,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _clean_context():
    clear_log_context()
    yield
    clear_log_context()


class TestJSONFormatter:
    def test_single_line_with_extras(self):
        formatter = JSONFormatter(static={"service": "video-service"})

        line = formatter.format(_record(video_id="v1"))

        assert "\n" not in line
        data = json.loads(line)
        assert data["level"] == "INFO"
        assert data["logger"] == "video_service.features.videos.service"
        assert data["message"] == "Video created"
        assert data["video_id"] == "v1"
        assert data["service"] == "video-service"
        assert data["timestamp"].endswith("Z")

    def test_message_args_are_interpolated(self):
        record = _record("listening on %s:%s")
        record.args = ("0.0.0.0", 8000)

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "listening on 0.0.0.0:8000"

    def test_exception_kept_on_one_line(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = _record("failed")
            record.exc_info = sys.exc_info()

        line = JSONFormatter().format(record)

        assert "\n" not in line
        assert "RuntimeError: boom" in json.loads(line)["exception"]

    def test_unserializable_extra_uses_str(self):
        data = json.loads(JSONFormatter().format(_record(payload=object())))

        assert data["payload"].startswith("<object object")


class TestLogContext:
    def test_set_and_remove(self):
        set_log_context(request_id="req-1", viewer_id="u1")
        remove_from_log_context("viewer_id")

        assert get_log_context() == {"request_id": "req-1"}

    def test_filter_injects_without_overriding(self):
        set_log_context(request_id="req-1", video_id="from-context")
        record = _record(video_id="from-extra")

        assert ContextInjectingFilter().filter(record) is True
        assert record.request_id == "req-1"
        assert record.video_id == "from-extra"


class TestLazyLogger:
    def test_callable_not_evaluated_when_disabled(self, caplog: pytest.LogCaptureFixture):
        calls: list[int] = []
        logger = get_lazy_logger("tests.lazy.disabled")
        caplog.set_level(logging.INFO, logger="tests.lazy.disabled")

        logger.debug(lambda: calls.append(1) or "expensive")

        assert calls == []

    def test_callable_evaluated_when_enabled(self, caplog: pytest.LogCaptureFixture):
        logger = get_lazy_logger("tests.lazy.enabled")
        caplog.set_level(logging.DEBUG, logger="tests.lazy.enabled")

        logger.debug(lambda: "db.page: 3 rows")

        assert "db.page: 3 rows" in caplog.messages

    def test_lazy_string(self):
        assert str(LazyString(lambda: 42)) == "42"
