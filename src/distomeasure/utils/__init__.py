"""Shared helpers."""

from .logging import (
    JsonLogFormatter,
    configure_json_logger,
    flush_handlers,
    generate_trace_id,
    log_commit,
    log_event,
    log_summaries,
)

__all__ = [
    "JsonLogFormatter",
    "configure_json_logger",
    "flush_handlers",
    "generate_trace_id",
    "log_commit",
    "log_event",
    "log_summaries",
]
