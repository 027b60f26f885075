"""Process-wide HTTP client settings.

The SDK never builds :class:`requests.Session` objects by hand. Everything
that talks HTTP asks :func:`get_global_settings` for a session, so the headers,
User-Agent, TLS verification and timeout chosen at configuration time apply
uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

import requests
from requests import Response, Session
from requests.adapters import HTTPAdapter

from ..observability.logging import get_logger
from ..observability.tracing import TraceSource

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 100.0


def format_user_agent(products: Iterable[object]) -> str:
    """Render product tokens as a User-Agent header value."""
    return " ".join(str(product) for product in products if str(product))


class TimeoutHTTPAdapter(HTTPAdapter):
    """Adapter that applies a default timeout when a call does not pass one."""

    def __init__(self, timeout: float | None, *args: Any, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


@dataclass
class HttpClientSettings:
    """Defaults applied to every session the SDK creates."""

    timeout: float | None = DEFAULT_TIMEOUT_SECONDS
    headers: dict[str, str] = field(default_factory=dict)
    user_agent: str | None = None
    verify: bool = True
    trace_source: TraceSource | None = None

    def reset_defaults(self) -> None:
        self.timeout = DEFAULT_TIMEOUT_SECONDS
        self.headers = {}
        self.user_agent = None
        self.verify = True
        self.trace_source = None

    def _prepare_headers(self) -> dict[str, str]:
        headers = dict(self.headers)
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers

    def _trace_response(self, response: Response, *args: Any, **kwargs: Any) -> Response:
        source = self.trace_source
        if source is not None and source.enabled:
            request = response.request
            source.event(
                "HTTP response received",
                method=request.method if request is not None else None,
                url=response.url or (request.url if request is not None else None),
                status=response.status_code,
                elapsed_ms=int(response.elapsed.total_seconds() * 1000),
            )
        return response

    def create_session(self) -> Session:
        """Build a session carrying these settings."""
        session = requests.Session()
        session.headers.update(self._prepare_headers())
        session.verify = self.verify
        adapter = TimeoutHTTPAdapter(self.timeout)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        if self.trace_source is not None:
            session.hooks["response"].append(self._trace_response)
        return session


_global_settings = HttpClientSettings()


def get_global_settings() -> HttpClientSettings:
    return _global_settings


def configure(callback: Callable[[HttpClientSettings], None] | None = None) -> HttpClientSettings:
    """Run ``callback`` against the global settings and return them."""
    if callback is not None:
        callback(_global_settings)
    logger.debug(
        f"HTTP settings configured: timeout={_global_settings.timeout} "
        f"user_agent={_global_settings.user_agent!r}"
    )
    return _global_settings


def reset_defaults() -> None:
    _global_settings.reset_defaults()
