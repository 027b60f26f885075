"""Observability and logging facades."""

from .logging import (
    configure_logging,
    get_log_context,
    get_logger,
    log_context,
    log_exception,
    reset_logging,
)
from .tracing import (
    TraceSource,
    add_span_event,
    configure_tracing,
    get_trace_context,
    is_tracing_enabled,
    record_exception,
    set_span_attribute,
    trace_span,
    traced,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_log_context",
    "get_logger",
    "log_context",
    "log_exception",
    "reset_logging",
    # Tracing
    "TraceSource",
    "add_span_event",
    "configure_tracing",
    "get_trace_context",
    "is_tracing_enabled",
    "record_exception",
    "set_span_attribute",
    "trace_span",
    "traced",
]
