"""Configuration file support for the Rackspace SDK.

A configuration file is a JSON document with up to three sections::

    {
        "http": {"timeout": 30, "headers": {"X-Trace": "on"}, "verify": true},
        "json": {"indent": 2, "sort_keys": true},
        "user_agents": ["my-app/2.1"]
    }

:func:`configure_from_file` turns it into the callbacks accepted by
:func:`rackspace.configure`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .settings import RackspaceConfigurationOptions, RackspaceNet, get_default
from .infrastructure.http import HttpClientSettings
from .infrastructure.observability import get_logger
from .infrastructure.serialization import JsonSettings
from .sdk import ProductInfo

logger = get_logger(__name__)

_HTTP_FIELDS: dict[str, tuple[type, ...]] = {
    "timeout": (int, float, type(None)),
    "headers": (dict,),
    "verify": (bool,),
}
_JSON_FIELDS: dict[str, tuple[type, ...]] = {
    "indent": (int, type(None)),
    "sort_keys": (bool,),
    "ensure_ascii": (bool,),
    "ignore_none": (bool,),
}
_SECTIONS = {"http", "json", "user_agents"}


class ConfigurationError(Exception):
    """Raised when a configuration file is unreadable or malformed."""


def load_config(path: str | Path) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        A dictionary of configuration values.

    Raises:
        ConfigurationError: If the file cannot be read or is not a JSON object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error(f"Failed to load configuration from {path}: {exc}")
        raise ConfigurationError(
            f"Failed to load configuration from {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration in {path} must be a JSON object")
    return data


def _validated_section(
    data: Dict[str, Any], section: str, fields: dict[str, tuple[type, ...]]
) -> Dict[str, Any]:
    values = data.get(section, {})
    if not isinstance(values, dict):
        raise ConfigurationError(f"'{section}' must be an object")
    for key, value in values.items():
        if key not in fields:
            raise ConfigurationError(f"Unknown {section} setting '{key}'")
        allowed = fields[key]
        # bool is an int subclass; only accept it where bool is listed
        if isinstance(value, bool) and bool not in allowed:
            raise ConfigurationError(f"Invalid value for {section}.{key}: {value!r}")
        if not isinstance(value, allowed):
            raise ConfigurationError(f"Invalid value for {section}.{key}: {value!r}")
    return values


def _parse_user_agents(data: Dict[str, Any]) -> list[ProductInfo]:
    values = data.get("user_agents", [])
    if not isinstance(values, list):
        raise ConfigurationError("'user_agents' must be a list")
    agents = []
    for value in values:
        if not isinstance(value, str):
            raise ConfigurationError(f"Invalid user agent: {value!r}")
        try:
            agents.append(ProductInfo.parse(value))
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
    return agents


def configure_from_mapping(data: Dict[str, Any], gate: RackspaceNet | None = None) -> None:
    """Validate ``data`` and pass it to the gate's ``configure``."""
    unknown = set(data) - _SECTIONS
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration sections: {', '.join(sorted(unknown))}")
    http_values = _validated_section(data, "http", _HTTP_FIELDS)
    json_values = _validated_section(data, "json", _JSON_FIELDS)
    user_agents = _parse_user_agents(data)

    def configure_http(settings: HttpClientSettings) -> None:
        for key, value in http_values.items():
            if key == "headers":
                settings.headers.update(value)
            else:
                setattr(settings, key, value)

    def configure_json(settings: JsonSettings) -> None:
        for key, value in json_values.items():
            setattr(settings, key, value)

    def configure_options(options: RackspaceConfigurationOptions) -> None:
        options.user_agents.extend(user_agents)

    (gate or get_default()).configure(
        configure_http if http_values else None,
        configure_json if json_values else None,
        configure_options if user_agents else None,
    )


def configure_from_file(path: str | Path, gate: RackspaceNet | None = None) -> None:
    """Configure the SDK from a JSON configuration file."""
    configure_from_mapping(load_config(path), gate)


__all__ = [
    "ConfigurationError",
    "configure_from_file",
    "configure_from_mapping",
    "load_config",
]
