"""JSON serialization defaults shared by the SDK."""

from .json_settings import (
    JsonSettings,
    dumps,
    get_default_settings,
    has_default_settings,
    loads,
    set_default_settings,
)

__all__ = [
    "JsonSettings",
    "dumps",
    "get_default_settings",
    "has_default_settings",
    "loads",
    "set_default_settings",
]
