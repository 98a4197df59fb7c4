"""Domain-specific configuration for the session registry file."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig

_REQUIRED_KEYS = ("path", "lock_timeout_seconds", "lock_poll_interval_seconds")


class RegistryConfig(BaseDomainConfig):
    """Domain-specific configuration accessor for the registry.

    Relative paths are resolved against the user's home directory, not CWD,
    so the registry location does not depend on where ``cs`` is run.
    """

    def _config_section(self) -> str:
        return "registry"

    def _validate_required_keys(self) -> None:
        if not self.section:
            raise RuntimeError("registry section missing from configuration")
        for key in _REQUIRED_KEYS:
            if key not in self.section:
                raise RuntimeError(f"registry.{key} missing from configuration")

    @cached_property
    def path(self) -> Path:
        self._validate_required_keys()
        p = Path(str(self.section["path"])).expanduser()
        if not p.is_absolute():
            p = Path.home() / p
        return p

    @cached_property
    def lock_timeout_seconds(self) -> float:
        self._validate_required_keys()
        return float(self.section["lock_timeout_seconds"])

    @cached_property
    def lock_poll_interval_seconds(self) -> float:
        self._validate_required_keys()
        return float(self.section["lock_poll_interval_seconds"])


__all__ = ["RegistryConfig"]
