"""Domain-specific configuration for operation timeouts."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class TimeoutsConfig(BaseDomainConfig):
    """Typed access to timeout settings (seconds)."""

    def _config_section(self) -> str:
        return "timeouts"

    @cached_property
    def git_operations_seconds(self) -> float:
        if "git_operations_seconds" not in self.section:
            raise RuntimeError("timeouts.git_operations_seconds missing from configuration")
        return float(self.section["git_operations_seconds"])


__all__ = ["TimeoutsConfig"]
