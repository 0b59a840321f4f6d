"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import io
import json
import logging
import sys

from superdesign_providers.base.log_support import JsonFormatter
from superdesign_providers.base.logging import (
    LOG_LEVEL_ENV,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
)
from superdesign_providers.base.host import LogNotifier


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")
    logger = get_logger(name="superdesign_providers.test", json_mode=True, level=logging.DEBUG)
    logger.info("hello")
    assert capsys.readouterr().err == ""
    logger.error("fail")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"
    assert data["logger"] == "superdesign_providers.test"
    monkeypatch.delenv(LOG_LEVEL_ENV)
    get_logger()


def test_log_event_merges_context_and_drops_none(capsys):
    logger = get_logger(name="superdesign_providers.test2", json_mode=True)
    ctx = LogContext(provider="gemini", model="gemini-1.5-pro-latest", extra={"request": "r1", "skip": None})
    log_event(logger, "query.start", ctx, url="https://x/?key=***", error_code=None)
    data = json.loads(capsys.readouterr().err.strip())
    assert data["event"] == "query.start"
    assert data["provider"] == "gemini"
    assert data["model"] == "gemini-1.5-pro-latest"
    assert data["request"] == "r1"
    assert "skip" not in data
    assert "error_code" not in data


def test_log_event_respects_level(capsys):
    logger = get_logger(name="superdesign_providers.test3", json_mode=True)
    log_event(logger, "init.error", level=logging.ERROR, message="boom")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR" and data["message"] == "boom"


def test_json_formatter_hoists_json_message() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord("n", logging.INFO, __file__, 1, json.dumps({"event": "e", "k": 1}), None, None)
    data = json.loads(formatter.format(record))
    assert data["event"] == "e" and data["k"] == 1
    assert "msg" not in data


def test_json_formatter_keeps_plain_message() -> None:
    formatter = JsonFormatter()
    record = logging.LogRecord("n", logging.WARNING, __file__, 1, "plain %s", ("text",), None)
    data = json.loads(formatter.format(record))
    assert data["msg"] == "plain text" and data["level"] == "WARNING"


def test_configure_logger_file_handler(tmp_path):
    target = tmp_path / "logs" / "providers.log"
    logger = configure_logger(level="DEBUG", file_path=str(target))
    try:
        log_event(logger, "refresh.ok", LogContext(provider="mistral"))
        for h in logger.handlers:
            h.flush()
        lines = target.read_text(encoding="utf-8").strip().splitlines()
        assert json.loads(lines[-1])["event"] == "refresh.ok"
    finally:
        configure_logger(level="INFO", file_path=None)
    assert not any(getattr(h, "baseFilename", None) for h in logger.handlers)


def test_log_notifier_writes_error(capsys):
    LogNotifier().show_error("Gemini API query failed: boom")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"
    assert data["logger"] == "superdesign_providers.notify"
    assert data["msg"] == "Gemini API query failed: boom"


def test_closed_console_stream_is_replaced(monkeypatch):
    dead = io.StringIO()
    monkeypatch.setattr(sys, "stderr", dead)
    get_logger(name="superdesign_providers.test4")
    dead.close()

    live = io.StringIO()
    monkeypatch.setattr(sys, "stderr", live)
    logger = get_logger(name="superdesign_providers.test4")
    log_event(logger, "query.end", LogContext(provider="gemini"))

    output = live.getvalue()
    assert "Logging error" not in output
    data = json.loads(output.strip())
    assert data["event"] == "query.end" and data["provider"] == "gemini"
    base = logging.getLogger("superdesign_providers")
    console = [h for h in base.handlers if isinstance(h, logging.StreamHandler) and not hasattr(h, "baseFilename")]
    assert len(console) == 1 and console[0].stream is live
