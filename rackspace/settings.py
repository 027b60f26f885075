"""Global configuration settings affecting the Rackspace SDK's behaviour.

The module exposes a process-wide :data:`configuration` object together with
:func:`configure` and :func:`reset_defaults`. Configuration happens once, at
start-up, and is forwarded to the base SDK layer (:mod:`rackspace.sdk`),
which in turn drives the global HTTP and JSON settings::

    import rackspace

    rackspace.configure(
        configure_http=lambda http: setattr(http, "timeout", 30),
        configure=lambda options: options.user_agents.append(
            rackspace.ProductInfo("my-app", "2.1")),
    )

Applications or tests that prefer explicit wiring can build their own
:class:`RackspaceNet` gate around a dedicated :class:`~rackspace.sdk.SdkConfiguration`.
"""

from __future__ import annotations

import threading
from typing import Callable

from . import sdk
from .infrastructure.observability import get_logger, log_exception, trace_span
from .sdk import ProductInfo, SdkConfiguration, SdkConfigurationOptions
from .sdk.config import ConfigureHttp, ConfigureJson

logger = get_logger(__name__)

PRODUCT_NAME = "rackspace-sdk"


def default_user_agent() -> ProductInfo:
    """The product token identifying this package and its installed version."""
    from rackspace import __version__

    return ProductInfo(PRODUCT_NAME, __version__)


class RackspaceConfigurationOptions:
    """Properties that affect the SDK's behaviour.

    Wraps the base SDK options and adds the provider's own product identity.
    Generally modified through :func:`configure`.
    """

    def __init__(self, product: ProductInfo | None = None) -> None:
        self.options = SdkConfigurationOptions()
        self.product = product or default_user_agent()
        self.reset_defaults()

    def __repr__(self) -> str:
        agents = ", ".join(str(ua) for ua in self.user_agents)
        return f"RackspaceConfigurationOptions(user_agents=[{agents}])"

    @property
    def user_agents(self) -> list[ProductInfo]:
        return self.options.user_agents

    def apply(self, target: SdkConfigurationOptions) -> None:
        """Overwrite ``target``'s user agents with ours, keeping their order."""
        target.user_agents.clear()
        for user_agent in self.user_agents:
            target.user_agents.append(user_agent)

    def reset_defaults(self) -> None:
        self.options.reset_defaults()
        self.user_agents.append(self.product)


ConfigureOptions = Callable[[RackspaceConfigurationOptions], None]


class RackspaceNet:
    """Thread-safe, one-time configuration gate for the Rackspace SDK."""

    def __init__(
        self,
        sdk_configuration: SdkConfiguration | None = None,
        options: RackspaceConfigurationOptions | None = None,
    ) -> None:
        self.configuration = options if options is not None else RackspaceConfigurationOptions()
        self.sdk = sdk_configuration if sdk_configuration is not None else sdk.get_default()
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
        """Provide thread-safe access to the global configuration options.

        Only the first call takes effect; call it once at application
        start-up, before creating any SDK objects.

        Args:
            configure_http: Additional configuration of the global HTTP settings.
            configure_json: Additional configuration of the JSON defaults.
            configure: Additional configuration of the Rackspace options.
        """
        with self._lock:
            if self._configured:
                logger.debug("Rackspace SDK already configured; ignoring configure()")
                return

            with trace_span("rackspace.configure"):
                try:
                    if configure is not None:
                        configure(self.configuration)
                    self.sdk.configure(
                        configure_http, configure_json, self.configuration.apply)
                except Exception as exc:
                    log_exception(logger, "Rackspace SDK configuration failed", exc)
                    raise
            self._configured = True
            logger.debug(f"Rackspace SDK configured: {self.configuration!r}")

    def reset_defaults(self) -> None:
        """Reset all configuration (Rackspace, base SDK, HTTP and JSON) so
        :meth:`configure` can be called again."""
        with self._lock:
            if not self._configured:
                return

            self.configuration.reset_defaults()
            self.sdk.reset_defaults()
            self._configured = False
            logger.debug("Rackspace SDK configuration reset to defaults")


class Tracing:
    """Trace sources re-exported from :class:`rackspace.sdk.Tracing`."""

    http = sdk.Tracing.http


_default = RackspaceNet()
configuration = _default.configuration


def get_default() -> RackspaceNet:
    return _default


def configure(
    configure_http: ConfigureHttp | None = None,
    configure_json: ConfigureJson | None = None,
    configure: ConfigureOptions | None = None,
) -> None:
    """Configure the process-wide gate. See :meth:`RackspaceNet.configure`."""
    _default.configure(configure_http, configure_json, configure)


def reset_defaults() -> None:
    """Reset the process-wide gate. See :meth:`RackspaceNet.reset_defaults`."""
    _default.reset_defaults()
