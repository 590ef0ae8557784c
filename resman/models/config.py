"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ResourceManagerConfig:
    """Resource manager configuration."""

    wait_for_all: bool = True
    kind: str = "resource"


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass
class ResmanConfig:
    """Top-level resman configuration."""

    manager: ResourceManagerConfig = field(default_factory=ResourceManagerConfig)
    log: LogConfig = field(default_factory=LogConfig)
