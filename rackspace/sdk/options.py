"""Option types shared by the base SDK and provider layers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProductInfo:
    """One product token of a User-Agent header, e.g. ``rackspace-sdk/1.0``."""

    name: str
    version: str | None = None

    def __post_init__(self) -> None:
        if not self.name or any(c.isspace() or c == "/" for c in self.name):
            raise ValueError(f"Invalid product name: {self.name!r}")
        if self.version is not None and any(c.isspace() for c in self.version):
            raise ValueError(f"Invalid product version: {self.version!r}")

    def __str__(self) -> str:
        if self.version:
            return f"{self.name}/{self.version}"
        return self.name

    @classmethod
    def parse(cls, value: str) -> "ProductInfo":
        """Parse ``name/version`` (version optional)."""
        name, sep, version = value.strip().partition("/")
        return cls(name, version if sep else None)


@dataclass
class SdkConfigurationOptions:
    """Settings that affect the base SDK's behaviour."""

    user_agents: list[ProductInfo] = field(default_factory=list)

    def reset_defaults(self) -> None:
        self.user_agents.clear()
