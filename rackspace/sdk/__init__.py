"""Base SDK configuration layer."""

from .config import (
    SdkConfiguration,
    Tracing,
    configuration,
    configure,
    get_default,
    reset_defaults,
)
from .options import ProductInfo, SdkConfigurationOptions

__all__ = [
    "ProductInfo",
    "SdkConfiguration",
    "SdkConfigurationOptions",
    "Tracing",
    "configuration",
    "configure",
    "get_default",
    "reset_defaults",
]
