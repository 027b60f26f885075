"""Logging utilities for the Rackspace SDK.

Centralised logging configuration plus helpers for contextual log messages.
Library code only ever calls :func:`get_logger`; applications opt in to the
SDK's handler layout with :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator


# ---------------------------------------------------------------------------
# Context variables for structured logging
# ---------------------------------------------------------------------------

_log_context: ContextVar[dict[str, Any]] = ContextVar(
    "log_context", default={})

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ContextualFormatter(logging.Formatter):
    """Formatter that appends context fields to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = _log_context.get()
        if ctx:
            ctx_str = " ".join(f"{k}={v}" for k, v in ctx.items())
            record.msg = f"{record.msg} [{ctx_str}]"
        return super().format(record)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Temporarily add context fields to all log messages.

    Usage::

        with log_context(gate="rackspace"):
            logger.debug("Applying configuration")

    Fields are merged with any existing context and restored on exit.
    """
    current = _log_context.get()
    merged = {**current, **fields}
    token = _log_context.set(merged)
    try:
        yield
    finally:
        _log_context.reset(token)


def get_log_context() -> dict[str, Any]:
    """Return the context fields currently in effect."""
    return dict(_log_context.get())


# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

_configured = False


def configure_logging(
    level: int = logging.INFO,
    third_party_level: int = logging.WARNING,
    stream: Any = None,
) -> None:
    """Configure logging for applications built on the SDK.

    Call this once at startup. Subsequent calls are ignored.

    Args:
        level: Log level for the ``rackspace`` logger hierarchy.
        third_party_level: Log level for HTTP libraries (default WARNING).
        stream: Output stream for the handler (defaults to stderr).
    """
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger("rackspace")
    root.setLevel(level)

    # Remove any existing handlers to avoid duplicates
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ContextualFormatter(LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False

    # Quieten noisy third-party loggers
    for name in ("urllib3", "requests", "opentelemetry"):
        logging.getLogger(name).setLevel(third_party_level)


def reset_logging() -> None:
    """Undo :func:`configure_logging` so it can be applied again."""
    global _configured
    root = logging.getLogger("rackspace")
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True
    _configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given name.

    Unlike an application, the SDK never installs a fallback handler: when
    :func:`configure_logging` has not been called, records flow to whatever
    the host application configured.

    Args:
        name: Name of the logger (typically __name__).
    """
    logger = logging.getLogger(name)
    if not _configured and not logger.handlers and not logging.getLogger().handlers:
        logger.addHandler(logging.NullHandler())
    return logger


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """Log an exception with context fields.

    Args:
        logger: Logger instance.
        message: Human-readable message describing the error.
        exc: The exception that was raised.
        **context: Additional context fields to include.
    """
    with log_context(**context):
        logger.exception(f"{message}: {exc}")
