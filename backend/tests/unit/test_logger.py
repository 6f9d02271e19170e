"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from sessionauth.core.logger import JSONFormatter, configure_logging, ensure_request_id, log_event


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("DEBUG")
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)


def test_json_formatter_promotes_extra_fields() -> None:
    record = logging.makeLogRecord(
        {
            "name": "sessionauth.test",
            "levelno": logging.INFO,
            "levelname": "INFO",
            "msg": "auth.login",
            "identity": "alice",
        }
    )

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "auth.login"
    assert payload["level"] == "INFO"
    assert payload["identity"] == "alice"
    assert payload["request_id"] is None


def test_log_event_attaches_event_and_fields(caplog) -> None:
    logger = logging.getLogger("sessionauth.test")

    with caplog.at_level(logging.INFO, logger="sessionauth.test"):
        log_event(logger, "auth.logout", identity="alice")

    (record,) = [r for r in caplog.records if r.name == "sessionauth.test"]
    assert record.getMessage() == "auth.logout"
    assert record.event == "auth.logout"
    assert record.identity == "alice"


def test_ensure_request_id_prefers_correlation_header(app) -> None:
    with app.test_request_context(headers={"X-Correlation-ID": "corr-7"}):
        assert ensure_request_id() == "corr-7"
        assert ensure_request_id() == "corr-7"

    with app.test_request_context():
        minted = ensure_request_id()
        assert minted not in {"corr-7", ""}
        assert ensure_request_id() == minted
