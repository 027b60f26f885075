"""
Rackspace SDK package initializer.

Exposes the global configuration of the SDK: the :data:`configuration`
singleton, the one-time :func:`configure` entry point, :func:`reset_defaults`
and the :class:`Tracing` handles.

The package's ``__version__`` is read from the installed distribution
metadata via importlib.metadata and is also the version advertised in the
SDK's User-Agent header.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("rackspace-sdk")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

from .settings import (  # noqa: E402
    PRODUCT_NAME,
    RackspaceConfigurationOptions,
    RackspaceNet,
    Tracing,
    configuration,
    configure,
    reset_defaults,
)
from .sdk import ProductInfo  # noqa: E402

__all__: list[str] = [
    "PRODUCT_NAME",
    "ProductInfo",
    "RackspaceConfigurationOptions",
    "RackspaceNet",
    "Tracing",
    "__version__",
    "configuration",
    "configure",
    "reset_defaults",
]
