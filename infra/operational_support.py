from __future__ import annotations

import json
import logging
import os
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Iterator, Mapping

from infra.path import user_data_dir
from infra.version import get_app_version

logger = logging.getLogger(__name__)

_TRACE_ID_CTX: ContextVar[str | None] = ContextVar("cpm_trace_id", default=None)

EVENTS_FILE_NAME = "support-events.jsonl"


def create_trace_id(prefix: str = "run") -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"{prefix}-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    value = (_TRACE_ID_CTX.get() or "").strip()
    return value or None


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    """Tag every log record and support event inside the block with one id."""
    bound = (trace_id or "").strip() or create_trace_id()
    token = _TRACE_ID_CTX.set(bound)
    try:
        yield bound
    finally:
        _TRACE_ID_CTX.reset(token)


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (int, float, bool, str)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (set, frozenset)):
        return [_jsonable(item) for item in sorted(value, key=str)]
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return str(value)


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


@dataclass(frozen=True)
class SupportEvent:
    event_type: str
    message: str
    level: str
    trace_id: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp_utc: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_json(self) -> str:
        payload: dict[str, Any] = {
            "timestamp_utc": self.timestamp_utc,
            "event_type": self.event_type,
            "level": self.level,
            "trace_id": self.trace_id,
            "message": self.message,
            "app_version": get_app_version(),
            "pid": os.getpid(),
        }
        if self.data:
            payload["data"] = self.data
        return json.dumps(payload, ensure_ascii=True, sort_keys=True)


class OperationalSupport:
    """
    Append-only JSON-lines journal of notable scheduler events
    (reconciliation runs, skipped runs, failures), kept next to the log file.
    """

    def __init__(self, events_path: str | Path | None = None) -> None:
        if events_path is None:
            events_path = user_data_dir() / "logs" / EVENTS_FILE_NAME
        self._events_path = Path(events_path)
        self._events_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    @property
    def events_path(self) -> Path:
        return self._events_path

    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        trace_id: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> str:
        event = SupportEvent(
            event_type=(event_type or "").strip() or "support.event",
            message=message or "",
            level=(level or "INFO").strip().upper(),
            trace_id=(trace_id or current_trace_id() or create_trace_id("evt")).strip(),
            data=_jsonable(dict(data)) if data else {},
        )
        with self._lock:
            with self._events_path.open("a", encoding="utf-8") as handle:
                handle.write(event.to_json() + "\n")
        return event.trace_id

    def capture_exception(
        self,
        *,
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: Any,
        context: str,
    ) -> str:
        stack = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
        return self.emit_event(
            event_type="app.crash",
            level="ERROR",
            message=f"Unhandled exception in {context}: {exc_value}",
            data={
                "context": context,
                "exception_type": exc_type.__name__,
                "stacktrace": stack,
            },
        )

    def read_events(self, *, event_type: str | None = None) -> list[dict[str, Any]]:
        if not self._events_path.exists():
            return []
        wanted = (event_type or "").strip()
        events: list[dict[str, Any]] = []
        with self._events_path.open("r", encoding="utf-8", errors="ignore") as handle:
            for line in handle:
                if not line.strip():
                    continue
                try:
                    payload = json.loads(line)
                except json.JSONDecodeError:
                    logger.debug("Skipping unreadable support event line")
                    continue
                if not isinstance(payload, dict):
                    continue
                if wanted and payload.get("event_type") != wanted:
                    continue
                events.append(payload)
        return events


_GLOBAL_SUPPORT: OperationalSupport | None = None


def get_operational_support() -> OperationalSupport:
    global _GLOBAL_SUPPORT
    if _GLOBAL_SUPPORT is None:
        _GLOBAL_SUPPORT = OperationalSupport()
    return _GLOBAL_SUPPORT


__all__ = [
    "OperationalSupport",
    "SupportEvent",
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
    "get_operational_support",
]
