"""HTTP adapters for the Rackspace SDK.

This package holds the global HTTP client settings and the session factory
that applies them.
"""

from .settings import (
    DEFAULT_TIMEOUT_SECONDS,
    HttpClientSettings,
    TimeoutHTTPAdapter,
    configure,
    format_user_agent,
    get_global_settings,
    reset_defaults,
)

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "HttpClientSettings",
    "TimeoutHTTPAdapter",
    "configure",
    "format_user_agent",
    "get_global_settings",
    "reset_defaults",
]
