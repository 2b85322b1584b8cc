# infra/logging_config.py
from __future__ import annotations
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from infra.path import user_data_dir
from infra.operational_support import TraceIdLogFilter, get_operational_support

LOG_FILE_NAME = "scheduler.log"
FILE_FORMAT = "%(asctime)s [%(levelname)s] trace=%(trace_id)s %(name)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s [trace=%(trace_id)s]: %(message)s"


def _with_trace(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.addFilter(TraceIdLogFilter())
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(level: int = logging.INFO, log_dir: Path | None = None) -> Path:
    """
    Route every logger to a rotating file (1 MB x 5) and the console.
    Records carry the trace id bound for the current reconciliation run.
    """
    log_dir = log_dir or (user_data_dir() / "logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(
        _with_trace(
            RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8"),
            FILE_FORMAT,
        )
    )
    root.addHandler(_with_trace(logging.StreamHandler(), CONSOLE_FORMAT))

    # quiet SQL echo unless explicitly debugging
    logging.getLogger("sqlalchemy.engine").setLevel(max(level, logging.WARNING))

    root.info("Logging initialized. Log file at %s", log_file)
    get_operational_support().emit_event(
        event_type="app.logging.initialized",
        message=f"Logging initialized at {log_file}",
        data={"log_file": str(log_file)},
    )
    return log_file
