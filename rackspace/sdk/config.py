"""Global configuration for the base SDK layer.

The base layer owns the process-wide collaborators: the HTTP client
settings, the JSON serializer defaults and the HTTP trace source. Provider
layers such as :mod:`rackspace.settings` sit on top and forward their
callbacks here.
"""

from __future__ import annotations

import threading
from typing import Callable

from ..infrastructure import http, serialization
from ..infrastructure.http import HttpClientSettings, format_user_agent
from ..infrastructure.observability import (
    TraceSource,
    get_logger,
    log_exception,
    trace_span,
)
from ..infrastructure.serialization import JsonSettings
from .options import SdkConfigurationOptions

logger = get_logger(__name__)

ConfigureHttp = Callable[[HttpClientSettings], None]
ConfigureJson = Callable[[JsonSettings], None]
ConfigureOptions = Callable[[SdkConfigurationOptions], None]


class Tracing:
    """Trace sources published by the SDK."""

    http = TraceSource("rackspace.http")


class SdkConfiguration:
    """Thread-safe, one-time configuration of the base SDK.

    ``configure`` runs at most once until ``reset_defaults`` is called; later
    calls return without invoking any callback.
    """

    def __init__(self, options: SdkConfigurationOptions | None = None) -> None:
        self.options = options if options is not None else SdkConfigurationOptions()
        self._lock = threading.RLock()
        self._configured = False

    @property
    def is_configured(self) -> bool:
        return self._configured

    def configure(
        self,
        configure_http: ConfigureHttp | None = None,
        configure_json: ConfigureJson | None = None,
        configure: ConfigureOptions | None = None,
    ) -> None:
        """Apply global settings to the SDK and its HTTP and JSON layers.

        Can only take effect once, at application start-up, before any SDK
        objects are created.

        Args:
            configure_http: Additional configuration of the global HTTP settings.
            configure_json: Additional configuration of the JSON defaults.
            configure: Additional configuration of the SDK options.
        """
        with self._lock:
            if self._configured:
                logger.debug("SDK already configured; ignoring configure()")
                return

            with trace_span("rackspace.sdk.configure"):
                try:
                    if configure is not None:
                        configure(self.options)
                    self._configure_http(configure_http)
                    self._configure_json(configure_json)
                except Exception as exc:
                    log_exception(logger, "SDK configuration failed", exc)
                    # unconfigured means collaborators at their defaults
                    serialization.set_default_settings(None)
                    http.reset_defaults()
                    raise
            self._configured = True
            logger.debug(
                f"SDK configured with user agents "
                f"{[str(ua) for ua in self.options.user_agents]}"
            )

    def _configure_http(self, configure_http: ConfigureHttp | None) -> None:
        user_agents = list(self.options.user_agents)

        def apply_defaults(settings: HttpClientSettings) -> None:
            settings.user_agent = format_user_agent(user_agents) or None
            settings.trace_source = Tracing.http
            if configure_http is not None:
                configure_http(settings)

        http.reset_defaults()
        http.configure(apply_defaults)

    def _configure_json(self, configure_json: ConfigureJson | None) -> None:
        def build_settings() -> JsonSettings:
            settings = JsonSettings(ignore_none=True)
            if configure_json is not None:
                configure_json(settings)
            return settings

        # a failing configure_json must abort configure(), not the first dumps()
        build_settings()
        serialization.set_default_settings(build_settings)

    def reset_defaults(self) -> None:
        """Reset the SDK, HTTP and JSON settings so ``configure`` can run again."""
        with self._lock:
            if not self._configured:
                return

            serialization.set_default_settings(None)
            http.reset_defaults()
            self.options.reset_defaults()
            self._configured = False
            logger.debug("SDK configuration reset to defaults")


_default = SdkConfiguration()
configuration = _default.options


def get_default() -> SdkConfiguration:
    return _default


def configure(
    configure_http: ConfigureHttp | None = None,
    configure_json: ConfigureJson | None = None,
    configure: ConfigureOptions | None = None,
) -> None:
    _default.configure(configure_http, configure_json, configure)


def reset_defaults() -> None:
    _default.reset_defaults()
