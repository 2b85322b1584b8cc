from __future__ import annotations

import json
import logging

from infra.logging_config import setup_logging
from infra.operational_support import (
    OperationalSupport,
    TraceIdLogFilter,
    bind_trace_id,
    current_trace_id,
)


def test_operational_support_emits_structured_event(tmp_path):
    events_path = tmp_path / "support-events.jsonl"
    support = OperationalSupport(events_path=events_path)

    with bind_trace_id("inc-test-123"):
        trace_id = support.emit_event(
            event_type="schedule.reconciled",
            message="Rescheduled 2 task(s)",
            data={"updated": 2, "cycle": {"b", "a"}},
        )

    assert trace_id == "inc-test-123"
    rows = events_path.read_text(encoding="utf-8").splitlines()
    assert len(rows) == 1
    payload = json.loads(rows[0])
    assert payload["trace_id"] == "inc-test-123"
    assert payload["event_type"] == "schedule.reconciled"
    assert payload["level"] == "INFO"
    assert payload["data"] == {"updated": 2, "cycle": ["a", "b"]}


def test_operational_support_capture_exception_records_crash_event(tmp_path):
    support = OperationalSupport(events_path=tmp_path / "support-events.jsonl")

    try:
        raise RuntimeError("disk full")
    except RuntimeError as exc:
        with bind_trace_id("inc-crash-1"):
            support.capture_exception(
                exc_type=RuntimeError,
                exc_value=exc,
                exc_traceback=exc.__traceback__,
                context="unit-test",
            )

    events = support.read_events(event_type="app.crash")
    assert len(events) == 1
    payload = events[0]
    assert payload["level"] == "ERROR"
    assert payload["trace_id"] == "inc-crash-1"
    assert payload["data"]["exception_type"] == "RuntimeError"
    assert "disk full" in payload["message"]


def test_read_events_skips_malformed_lines(tmp_path):
    events_path = tmp_path / "support-events.jsonl"
    events_path.write_text('not json\n[1, 2]\n{"event_type": "x"}\n\n', encoding="utf-8")
    support = OperationalSupport(events_path=events_path)

    assert support.read_events() == [{"event_type": "x"}]
    assert support.read_events(event_type="y") == []


def test_bind_trace_id_restores_previous_value():
    assert current_trace_id() is None
    with bind_trace_id() as outer:
        assert outer.startswith("run-")
        with bind_trace_id("inner"):
            assert current_trace_id() == "inner"
        assert current_trace_id() == outer
    assert current_trace_id() is None


def test_trace_id_filter_stamps_records():
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
    with bind_trace_id("inc-9"):
        TraceIdLogFilter().filter(record)
    assert record.trace_id == "inc-9"


def test_setup_logging_writes_rotating_log(tmp_path, monkeypatch):
    monkeypatch.setenv("CPM_DATA_DIR", str(tmp_path / "data"))
    root = logging.getLogger()
    previous_handlers = list(root.handlers)
    previous_level = root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        logging.getLogger("scheduler.test").info("hello")
        for handler in root.handlers:
            handler.flush()
        assert log_file == tmp_path / "logs" / "scheduler.log"
        assert "hello" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
