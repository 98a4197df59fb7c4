"""Typed accessors for each configuration section."""
from .launcher import LauncherConfig
from .logging import LoggingConfig
from .registry import RegistryConfig
from .session import SessionConfig
from .timeouts import TimeoutsConfig

__all__ = [
    "LauncherConfig",
    "LoggingConfig",
    "RegistryConfig",
    "SessionConfig",
    "TimeoutsConfig",
]
