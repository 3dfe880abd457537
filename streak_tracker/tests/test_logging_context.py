"""Tests for structured logging and request_id propagation."""

import json
import logging

from streak_tracker.core.logging import JsonFormatter, PrettyFormatter, latency_bucket_ms, log_event


def test_request_id_in_response_and_logs(client, caplog):
    with caplog.at_level(logging.INFO, logger="streak_tracker"):
        response = client.post("/check-in")
    rid = response.headers.get("x-request-id")
    assert rid
    records = [r for r in caplog.records if getattr(r, "request_id", None) == rid]
    assert records, "Expected logs to contain request_id from response"
    assert len({r.request_id for r in records}) == 1


def test_check_in_events_are_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="streak_tracker"):
        client.post("/check-in")
        client.post("/check-in")
    messages = [r.getMessage() for r in caplog.records]
    assert "streak.check_in.recorded" in messages
    assert "streak.check_in.rejected" in messages
    recorded = next(r for r in caplog.records if r.getMessage() == "streak.check_in.recorded")
    assert recorded.current_streak == "1"
    assert recorded.event_type == "checked_in"


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("streak_tracker", logging.INFO, __file__, 1, "streak.reset", (), None)
    record.request_id = "rid-1"
    record.event_type = "reset"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "streak.reset"
    assert payload["request_id"] == "rid-1"
    assert payload["event_type"] == "reset"
    assert payload["level"] == "INFO"


def test_pretty_formatter_marks_request_id():
    record = logging.LogRecord("streak_tracker", logging.WARNING, __file__, 1, "app.error", (), None)
    record.request_id = "rid-2"
    line = PrettyFormatter().format(record)
    assert "[rid=rid-2]" in line
    assert "WARNING" in line


def test_log_event_truncates_long_values(caplog):
    with caplog.at_level(logging.INFO, logger="streak_tracker"):
        log_event("info", "long.value", extra={"blob": "x" * 1000})
    record = next(r for r in caplog.records if r.getMessage() == "long.value")
    assert record.blob.endswith("...<truncated>")
    assert len(record.blob) < 1000


def test_latency_buckets():
    assert latency_bucket_ms(None) == "unknown"
    assert latency_bucket_ms(5) == "<10ms"
    assert latency_bucket_ms(50) == "10-100ms"
    assert latency_bucket_ms(250) == "100-500ms"
    assert latency_bucket_ms(750) == "500-1000ms"
    assert latency_bucket_ms(5000) == ">=1000ms"
