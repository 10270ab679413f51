"""Structured logging for kinetix-bench."""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)
_attempt: ContextVar[int | None] = ContextVar("attempt", default=None)


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        run_id = _run_id.get()
        if run_id is not None:
            log_entry["run_id"] = run_id
        attempt = _attempt.get()
        if attempt is not None:
            log_entry["attempt"] = attempt

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in ("environment", "extra"):
            if hasattr(record, key) and key not in log_entry:
                log_entry[key] = getattr(record, key)

        return json.dumps(log_entry, default=str)


class RunTracer:
    """Context manager that tags log records with a generation run id.

    Each generation attempt (the first one and every blow-up retry) runs
    inside its own tracer so the records of a discarded batch can be told
    apart from the accepted one::

        with RunTracer(attempt=1) as tracer:
            logger.info("Solving")  # carries run_id and attempt
    """

    def __init__(self, run_id: str | None = None, attempt: int | None = None):
        self.run_id = run_id or uuid.uuid4().hex[:12]
        self.attempt = attempt
        self._tokens: list[Any] = []

    def __enter__(self) -> RunTracer:
        self._tokens = [_run_id.set(self.run_id), _attempt.set(self.attempt)]
        return self

    def __exit__(self, *exc: Any) -> None:
        if self._tokens:
            run_token, attempt_token = self._tokens
            _attempt.reset(attempt_token)
            _run_id.reset(run_token)
            self._tokens = []


class _RunIDFilter(logging.Filter):
    """Injects run id and attempt from context vars into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        run_id = _run_id.get()
        record.run_id = run_id if run_id is not None else "-"  # type: ignore[attr-defined]
        attempt = _attempt.get()
        record.attempt = attempt if attempt is not None else "-"  # type: ignore[attr-defined]
        return True


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | None = None,
    module_levels: dict[str, str] | None = None,
) -> None:
    """Configure kinetix-bench logging.

    Args:
        level: Package log level (e.g. 'DEBUG', 'INFO', 'WARNING').
        log_format: 'text' for human-readable or 'json' for structured output.
        log_file: Optional file path to write logs to.
        module_levels: Per-module log levels (e.g. {'kinetix_bench.simulation': 'DEBUG'}).
    """
    root_logger = logging.getLogger("kinetix_bench")
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | run=%(run_id)s#%(attempt)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    console.addFilter(_RunIDFilter())
    root_logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(_RunIDFilter())
        root_logger.addHandler(file_handler)

    if module_levels:
        for module, mod_level in module_levels.items():
            logging.getLogger(module).setLevel(getattr(logging, mod_level.upper(), logging.INFO))

    root_logger.debug(f"Logging configured: level={level}, format={log_format}")


__all__ = ["JSONFormatter", "RunTracer", "setup_logging"]
