import asyncio
import json
import logging
import sys
import uuid

import pytest

from neuralarch.utils.error_monitor import ErrorMonitor, MAX_PATTERNS_PER_TYPE, message_pattern
from neuralarch.utils.logger import ConsoleFormatter, JsonFormatter
from neuralarch.utils.performance_monitor import PerformanceMonitor


def make_record(message="GET /api", level=logging.INFO, **extra):
    record = logging.LogRecord("neuralarch.tests", level, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_lines_carry_request_context():
    line = json.loads(JsonFormatter().format(make_record(
        event="request", request_id="req-1", method="GET", path="/api", scratch="ignored",
    )))
    assert line["message"] == "GET /api"
    assert line["event"] == "request"
    assert line["request_id"] == "req-1"
    assert line["path"] == "/api"
    assert "scratch" not in line


def test_json_lines_include_exceptions():
    try:
        raise RuntimeError("pool exhausted")
    except RuntimeError:
        record = logging.LogRecord("neuralarch.tests", logging.ERROR, __file__, 1, "boom", None, None)
        record.exc_info = sys.exc_info()
    line = json.loads(JsonFormatter().format(record))
    assert line["exception"]["type"] == "RuntimeError"
    assert line["exception"]["message"] == "pool exhausted"


def test_console_lines_append_context_in_fixed_order():
    line = ConsoleFormatter().format(make_record(
        "db.get_experiments ok in 1.50ms",
        event="performance", operation="db.get_experiments", duration_ms=1.5, success=True,
    ))
    assert line.endswith(
        "db.get_experiments ok in 1.50ms | event=performance duration_ms=1.5 "
        "operation=db.get_experiments success=True"
    )


def test_console_lines_without_context_are_plain():
    assert "|" not in ConsoleFormatter().format(make_record("Database tables ensured."))


def test_request_and_response_lines_use_the_response_request_id(client, caplog):
    with caplog.at_level(logging.INFO, logger="neuralarch"):
        resp = client.get("/api/ping", headers={"X-Request-ID": "trace-7"})
    assert resp.headers["X-Request-ID"] == "trace-7"

    events = {
        record.event: record
        for record in caplog.records
        if getattr(record, "request_id", None) == "trace-7"
    }
    assert events["request"].path == "/api/ping"
    assert events["response"].status_code == 200


def test_failed_operation_is_logged_as_warning(caplog):
    monitor = PerformanceMonitor()

    @monitor.track_async_operation("db.flaky")
    async def flaky():
        raise RuntimeError("connection reset")

    with caplog.at_level(logging.DEBUG, logger="neuralarch"):
        with pytest.raises(RuntimeError):
            asyncio.run(flaky())

    record = next(r for r in caplog.records if getattr(r, "operation", None) == "db.flaky")
    assert record.levelno == logging.WARNING
    assert record.success is False
    assert monitor.get_operation_stats("db.flaky")["failure_count"] == 1


def test_cache_lookups_are_logged_with_key(caplog):
    monitor = PerformanceMonitor()
    with caplog.at_level(logging.DEBUG, logger="neuralarch"):
        monitor.track_cache_miss("stats:global")
        monitor.track_cache_hit("stats:global")

    lookups = [r.cache_hit for r in caplog.records if getattr(r, "cache_key", None) == "stats:global"]
    assert lookups == [False, True]
    assert monitor.get_cache_stats()["hit_rate"] == 50


def test_message_pattern_strips_ids_and_numbers():
    message = f"Experiment {uuid.uuid4()} not found after 3 retries"
    assert message_pattern(message) == "Experiment <id> not found after <n> retries"


def test_not_found_messages_collapse_to_one_pattern():
    monitor = ErrorMonitor()
    for _ in range(5):
        asyncio.run(monitor.track_error("resource_not_found", f"Architecture {uuid.uuid4()} not found"))

    stats = monitor.get_error_stats()["resource_not_found"]
    assert stats["total_count"] == 5
    assert stats["patterns"] == ["Architecture <id> not found"]


def test_distinct_patterns_per_type_are_bounded():
    monitor = ErrorMonitor()
    tracked = MAX_PATTERNS_PER_TYPE * 3
    for _ in range(tracked):
        asyncio.run(monitor.track_error("unknown_error", f"driver said x{uuid.uuid4().hex}"))

    assert len(monitor.error_patterns["unknown_error"]) == MAX_PATTERNS_PER_TYPE
    assert monitor.error_counts["unknown_error"] == tracked
