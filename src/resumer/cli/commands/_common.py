"""Shared helpers for command handlers."""
from __future__ import annotations

import argparse
from typing import Any, Dict

from resumer.core.config import ConfigManager, RegistryConfig
from resumer.core.session import SessionRegistry


def get_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Return the configuration loaded by the dispatcher (or load it now)."""
    config = getattr(args, "_config", None)
    if config is None:
        config = ConfigManager().load_config()
        args._config = config
    return config


def get_registry(args: argparse.Namespace) -> SessionRegistry:
    return SessionRegistry.from_config(RegistryConfig(get_config(args)))
