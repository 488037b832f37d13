"""Structured logging utilities emitting JSON Lines payloads."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Mapping, MutableMapping, Optional
from uuid import uuid4

if TYPE_CHECKING:  # pragma: no cover
    from ..workflow import CommitResult, HighlightSummary

__all__ = [
    "COMMIT_COMPLETED",
    "EXPORT_COMPLETED",
    "LOGGER_NAME",
    "SUMMARY_COMPLETED",
    "SUMMARY_START",
    "JsonLogFormatter",
    "configure_json_logger",
    "flush_handlers",
    "generate_trace_id",
    "log_commit",
    "log_event",
    "log_summaries",
]

LOGGER_NAME = "distomeasure"

COMMIT_COMPLETED = "commit.completed"
SUMMARY_START = "summary.start"
SUMMARY_COMPLETED = "summary.completed"
EXPORT_COMPLETED = "export.completed"


class JsonLogFormatter(logging.Formatter):
    """Format log records as single-line JSON payloads."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        payload: MutableMapping[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": message,
        }

        trace_id = getattr(record, "trace_id", None)
        if trace_id:
            payload["trace_id"] = trace_id

        payload["event"] = getattr(record, "event", None) or message

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, Mapping):
            payload.update(extra_fields)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_json_logger(log_path: Path | None, level: int = logging.INFO) -> logging.Logger:
    """Attach a JSONL handler (or a null handler) to the package logger."""

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_path is not None:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setFormatter(JsonLogFormatter())
    else:
        handler = logging.NullHandler()

    handler.setLevel(level)
    logger.addHandler(handler)
    return logger


def flush_handlers(logger: logging.Logger) -> None:
    """Ensure all handlers flush their buffers."""

    for handler in logger.handlers:
        handler.flush()


def generate_trace_id() -> str:
    """Return a unique trace identifier suitable for correlating log events."""

    return uuid4().hex


def log_event(
    logger: logging.Logger,
    event: str,
    *,
    trace_id: str | None = None,
    level: int = logging.INFO,
    message: str | None = None,
    **fields: Any,
) -> str:
    """Emit a structured event on ``logger`` and return its trace id."""

    event_trace_id = trace_id or generate_trace_id()
    extra = {
        "trace_id": event_trace_id,
        "event": event,
        "extra_fields": fields,
    }

    logger.log(level, message or event, extra=extra)
    return event_trace_id


def _minimum_path(minimum: Any) -> Optional[str]:
    return minimum.path if minimum is not None else None


def log_commit(logger: logging.Logger, result: "CommitResult", *, trace_id: str | None = None) -> str:
    """Record one field commit: what was stored and which samples now govern."""

    summary = result.summary
    return log_event(
        logger,
        COMMIT_COMPLETED,
        trace_id=trace_id,
        level=logging.INFO if result.normalized else logging.DEBUG,
        window_id=result.window_id,
        path=result.path,
        units=summary.unit.value,
        normalized=result.normalized,
        value=result.value,
        display=result.text,
        min_width_path=_minimum_path(summary.min_width),
        min_height_path=_minimum_path(summary.min_height),
    )


def log_summaries(
    logger: logging.Logger,
    summaries: Iterable["HighlightSummary"],
    *,
    trace_id: str | None = None,
    **fields: Any,
) -> str:
    """Record the governing minimums of a batch of windows."""

    rows = list(summaries)
    return log_event(
        logger,
        SUMMARY_COMPLETED,
        trace_id=trace_id,
        windows=len(rows),
        incomplete=sum(1 for row in rows if row.min_width is None or row.min_height is None),
        minimums={row.window_id: list(row.highlighted_paths) for row in rows},
        **fields,
    )
