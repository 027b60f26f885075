"""Global JSON serializer settings.

Callers that need to (de)serialize API payloads use the module-level
:func:`dumps` and :func:`loads`, which resolve the current default settings on
every call. Installing a factory with :func:`set_default_settings` changes the
behaviour everywhere at once.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable


def _default_converters() -> dict[type, Callable[[Any], Any]]:
    return {
        datetime: lambda value: value.isoformat(),
        date: lambda value: value.isoformat(),
        Enum: lambda value: value.value,
    }


def _drop_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_drop_none(v) for v in value]
    return value


@dataclass
class JsonSettings:
    """Options controlling how payloads are written and read."""

    indent: int | None = None
    sort_keys: bool = False
    ensure_ascii: bool = True
    ignore_none: bool = False
    converters: dict[type, Callable[[Any], Any]] = field(
        default_factory=_default_converters)

    def _encode_default(self, value: Any) -> Any:
        # exact type first, then the first registered base class
        converter = self.converters.get(type(value))
        if converter is None:
            for kind, candidate in self.converters.items():
                if isinstance(value, kind):
                    converter = candidate
                    break
        if converter is None:
            raise TypeError(
                f"Object of type {type(value).__name__} is not JSON serializable")
        converted = converter(value)
        if self.ignore_none:
            converted = _drop_none(converted)
        return converted

    def dumps(self, obj: Any) -> str:
        if self.ignore_none:
            obj = _drop_none(obj)
        return json.dumps(
            obj,
            indent=self.indent,
            sort_keys=self.sort_keys,
            ensure_ascii=self.ensure_ascii,
            default=self._encode_default,
        )

    def loads(self, text: str | bytes) -> Any:
        return json.loads(text)


_default_settings: Callable[[], JsonSettings] | None = None


def set_default_settings(factory: Callable[[], JsonSettings] | None) -> None:
    """Install (or with ``None``, remove) the default settings factory."""
    global _default_settings
    _default_settings = factory


def has_default_settings() -> bool:
    return _default_settings is not None


def get_default_settings() -> JsonSettings:
    """Return fresh settings from the installed factory, or plain defaults."""
    if _default_settings is None:
        return JsonSettings()
    return _default_settings()


def dumps(obj: Any) -> str:
    return get_default_settings().dumps(obj)


def loads(text: str | bytes) -> Any:
    return get_default_settings().loads(text)
