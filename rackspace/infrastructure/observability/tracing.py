"""OpenTelemetry tracing support for the Rackspace SDK.

Tracing is disabled by default and requires the opentelemetry packages to be
installed. When disabled, span helpers are no-ops and :class:`TraceSource`
only writes to its logger.

Usage:
    from rackspace.infrastructure.observability import configure_tracing, trace_span

    configure_tracing(service_name="my-app", endpoint="http://localhost:4317")

    with trace_span("rackspace.configure", gate="rackspace"):
        ...
"""

from __future__ import annotations

import functools
import inspect
import logging
import os
from contextlib import AbstractContextManager
from contextvars import ContextVar
from typing import Any, Callable, TypeVar

from .logging import get_logger, log_context

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# ---------------------------------------------------------------------------
# Tracing state
# ---------------------------------------------------------------------------

_tracer: Any = None
_tracing_enabled: bool = False

# Context variable for trace/span IDs (used for log correlation)
_trace_context: ContextVar[dict[str, str]] = ContextVar(
    "trace_context", default={}
)


def is_tracing_enabled() -> bool:
    """Check if tracing is currently enabled."""
    return _tracing_enabled


def get_trace_context() -> dict[str, str]:
    """Get current trace context for log correlation."""
    return _trace_context.get()


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def configure_tracing(
    *,
    service_name: str = "rackspace-sdk",
    endpoint: str | None = None,
    enable: bool = True,
    sample_rate: float = 1.0,
) -> bool:
    """Configure OpenTelemetry tracing.

    Args:
        service_name: Name of this service in traces.
        endpoint: OTLP endpoint URL (e.g., "http://localhost:4317").
                  If None, spans are only exported to the console when
                  ``OTEL_TRACES_CONSOLE=true``.
        enable: Whether to enable tracing. If False, all trace calls are no-ops.
        sample_rate: Fraction of traces to sample (0.0 to 1.0).

    Returns:
        True if tracing was successfully configured, False otherwise.
    """
    global _tracer, _tracing_enabled

    if not enable:
        _tracing_enabled = False
        _tracer = None
        logger.info("Tracing disabled by configuration")
        return False

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import SERVICE_NAME, Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

        resource = Resource.create({SERVICE_NAME: service_name})
        provider = TracerProvider(
            resource=resource, sampler=TraceIdRatioBased(sample_rate))

        if endpoint:
            try:
                from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
                    OTLPSpanExporter,
                )
                from opentelemetry.sdk.trace.export import BatchSpanProcessor

                exporter = OTLPSpanExporter(endpoint=endpoint)
                provider.add_span_processor(BatchSpanProcessor(exporter))
                logger.info(f"Tracing exporter configured for {endpoint}")
            except ImportError:
                logger.warning(
                    "opentelemetry-exporter-otlp not installed; traces won't be exported"
                )
        elif os.environ.get("OTEL_TRACES_CONSOLE", "").lower() == "true":
            from opentelemetry.sdk.trace.export import (
                ConsoleSpanExporter,
                SimpleSpanProcessor,
            )

            provider.add_span_processor(
                SimpleSpanProcessor(ConsoleSpanExporter()))
            logger.info("Console trace exporter enabled")

        trace.set_tracer_provider(provider)
        _tracer = trace.get_tracer(service_name)
        _tracing_enabled = True
        logger.info(f"Tracing enabled for service '{service_name}'")
        return True

    except ImportError as e:
        logger.debug(f"OpenTelemetry not available: {e}")
        _tracing_enabled = False
        return False
    except Exception as e:
        logger.warning(f"Failed to configure tracing: {e}")
        _tracing_enabled = False
        return False


# ---------------------------------------------------------------------------
# Tracing helpers
# ---------------------------------------------------------------------------


class trace_span(AbstractContextManager):
    def __init__(self, name: str, *, kind: str = "internal", **attributes: Any):
        self.name = name
        self.kind = kind
        self.attributes = attributes
        self.span = None
        self.span_ctx = None
        self.ctx_token = None

    def __enter__(self):
        if not _tracing_enabled or _tracer is None:
            return None
        from opentelemetry.trace import SpanKind

        kind_map = {
            "internal": SpanKind.INTERNAL,
            "server": SpanKind.SERVER,
            "client": SpanKind.CLIENT,
            "producer": SpanKind.PRODUCER,
            "consumer": SpanKind.CONSUMER,
        }
        span_kind = kind_map.get(self.kind, SpanKind.INTERNAL)
        self.span_ctx = _tracer.start_as_current_span(self.name, kind=span_kind)
        self.span = self.span_ctx.__enter__()
        for key, value in self.attributes.items():
            if value is not None:
                self.span.set_attribute(key, str(value))
        ctx = self.span.get_span_context()
        if ctx.is_valid:
            self.ctx_token = _trace_context.set({
                "trace_id": format(ctx.trace_id, "032x"),
                "span_id": format(ctx.span_id, "016x"),
            })
        return self.span

    def __exit__(self, exc_type, exc_value, traceback):
        if self.ctx_token is not None:
            _trace_context.reset(self.ctx_token)
        if self.span_ctx is not None:
            self.span_ctx.__exit__(exc_type, exc_value, traceback)
        return False


def traced(
    name: str | None = None,
    *,
    kind: str = "internal",
) -> Callable[[F], F]:
    """Decorator to trace a function.

    Args:
        name: Span name (defaults to function name).
        kind: Span kind.
    """
    def decorator(func: F) -> F:
        span_name = name or func.__name__

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with trace_span(span_name, kind=kind):
                return func(*args, **kwargs)

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with trace_span(span_name, kind=kind):
                return await func(*args, **kwargs)

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator


def _current_span() -> Any:
    if not _tracing_enabled:
        return None
    from opentelemetry import trace

    span = trace.get_current_span()
    if span and span.is_recording():
        return span
    return None


def add_span_event(name: str, **attributes: Any) -> None:
    """Add an event to the current span, if one is recording."""
    span = _current_span()
    if span is not None:
        span.add_event(name, attributes={
                       k: str(v) for k, v in attributes.items() if v is not None})


def set_span_attribute(key: str, value: Any) -> None:
    """Set an attribute on the current span (converted to string)."""
    span = _current_span()
    if span is not None:
        span.set_attribute(key, str(value))


def record_exception(exception: BaseException) -> None:
    """Record an exception on the current span."""
    span = _current_span()
    if span is not None:
        from opentelemetry import trace

        span.record_exception(exception)
        span.set_status(trace.Status(trace.StatusCode.ERROR))


# ---------------------------------------------------------------------------
# Trace sources
# ---------------------------------------------------------------------------


class TraceSource:
    """A named channel for diagnostic output.

    Each event is written to the logger of the same name and, while a span is
    recording, attached to it as a span event. Trace sources are long-lived
    and shared: the SDK hands out the same instance to every caller.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.logger = get_logger(name)

    def __repr__(self) -> str:
        return f"TraceSource({self.name!r})"

    @property
    def enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG) or is_tracing_enabled()

    def event(self, message: str, *, level: int = logging.DEBUG, **fields: Any) -> None:
        """Record an event on this source."""
        with log_context(**fields):
            self.logger.log(level, message, extra={"trace": fields})
        add_span_event(f"{self.name}: {message}", **fields)

    def span(self, operation: str, *, kind: str = "internal", **attributes: Any) -> trace_span:
        """Open a span named after this source and ``operation``."""
        return trace_span(f"{self.name}.{operation}", kind=kind, **attributes)
