"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from resman.models.config import LogConfig, ResmanConfig, ResourceManagerConfig


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"RESMAN_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    valid = {"json", "console"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log format: {value}. Must be one of {valid}")
    return value.lower()


def _validate_kind(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Resource kind must not be empty")
    return value


def load_config() -> ResmanConfig:
    """Load configuration from RESMAN_* environment variables."""
    return ResmanConfig(
        manager=ResourceManagerConfig(
            wait_for_all=_env_bool("WAIT_FOR_ALL", True),
            kind=_validate_kind(_env("KIND", "resource")),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
