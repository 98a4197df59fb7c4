"""Layered configuration: bundled YAML defaults, user YAML, CS_* environment."""
from .base import BaseDomainConfig
from .domains import (
    LauncherConfig,
    LoggingConfig,
    RegistryConfig,
    SessionConfig,
    TimeoutsConfig,
)
from .manager import ConfigManager

__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "LauncherConfig",
    "LoggingConfig",
    "RegistryConfig",
    "SessionConfig",
    "TimeoutsConfig",
]
