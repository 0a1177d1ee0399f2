"""Unit tests for core/logging.py."""

import json
import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.notekeeper.core import logging as logging_module
from src.notekeeper.core.logging import (
    ColoredFormatter,
    JSONFormatter,
    LoggingMiddleware,
    RequestContextFilter,
    build_logging_config,
    get_log_level,
    get_logger,
)


def _record(msg="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("notekeeper.test", level, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    output = json.loads(JSONFormatter().format(_record(note_id="abc")))
    assert output["message"] == "hello"
    assert output["level"] == "INFO"
    assert output["logger"] == "notekeeper.test"
    assert output["extra"] == {"note_id": "abc"}


def test_json_formatter_serialises_exceptions():
    try:
        raise ValueError("bad")
    except ValueError:
        import sys

        record = _record()
        record.exc_info = sys.exc_info()
    output = json.loads(JSONFormatter().format(record))
    assert output["exception"]["type"] == "ValueError"
    assert output["exception"]["message"] == "bad"


def test_colored_formatter_leaves_record_untouched():
    record = _record()
    formatted = ColoredFormatter("%(levelname)s %(message)s").format(record)
    assert "\033[" in formatted
    assert record.levelname == "INFO"


def test_get_log_level():
    assert get_log_level("debug") == logging.DEBUG
    assert get_log_level("nonsense") == logging.INFO


def test_get_logger_namespaces_under_app():
    assert get_logger("notes").name == "notekeeper.notes"


class _Settings:
    debug = False
    log_level = "INFO"
    environment = "test"

    def __init__(self, log_dir, log_to_file):
        self.log_dir = str(log_dir)
        self.log_to_file = log_to_file


def test_build_logging_config_without_files(monkeypatch, tmp_path):
    monkeypatch.setattr(logging_module, "get_settings", lambda: _Settings(tmp_path / "logs", False))
    config = build_logging_config()
    assert set(config["handlers"]) == {"console"}
    assert config["loggers"]["notekeeper"]["handlers"] == ["console"]
    assert not (tmp_path / "logs").exists()


def test_build_logging_config_with_files(monkeypatch, tmp_path):
    monkeypatch.setattr(logging_module, "get_settings", lambda: _Settings(tmp_path / "logs", True))
    config = build_logging_config()
    assert {"file", "error_file"} <= set(config["handlers"])
    assert (tmp_path / "logs").is_dir()


def test_json_formatter_includes_request_id():
    record = _record()
    record.request_id = "abc123"
    output = json.loads(JSONFormatter().format(record))
    assert output["request_id"] == "abc123"
    assert "extra" not in output


def _ping_app():
    app = FastAPI()

    @app.get("/ping")
    async def ping():
        get_logger("test").info("inside handler")
        return {"ok": True}

    app.add_middleware(LoggingMiddleware)
    return app


def test_logging_middleware_logs_and_tags_records(caplog):
    request_filter = RequestContextFilter()
    caplog.handler.addFilter(request_filter)
    loggers = [logging.getLogger("notekeeper.http"), logging.getLogger("notekeeper.test")]
    for logger in loggers:
        logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="notekeeper"):
            resp = TestClient(_ping_app()).get("/ping")
    finally:
        for logger in loggers:
            logger.removeHandler(caplog.handler)
        caplog.handler.removeFilter(request_filter)

    assert resp.status_code == 200
    request_id = resp.headers["x-request-id"]
    assert request_id

    by_message = {r.getMessage(): r for r in caplog.records}
    assert by_message["HTTP Request"].request_id == request_id
    assert by_message["inside handler"].request_id == request_id
    assert by_message["HTTP Response"].status_code == 200


def test_logging_middleware_reuses_incoming_request_id():
    resp = TestClient(_ping_app()).get("/ping", headers={"X-Request-ID": "from-proxy"})
    assert resp.headers["x-request-id"] == "from-proxy"
