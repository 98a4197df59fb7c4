"""Domain-specific configuration for session identity."""
from __future__ import annotations

from functools import cached_property
from typing import Optional

from ..base import BaseDomainConfig


class SessionConfig(BaseDomainConfig):
    """Provides access to the identifier namespace override."""

    def _config_section(self) -> str:
        return "session"

    @cached_property
    def namespace(self) -> Optional[str]:
        """Raw namespace override, or None when unset (blank counts as unset)."""
        raw = self.section.get("namespace")
        if raw is None:
            return None
        text = str(raw).strip()
        return text or None


__all__ = ["SessionConfig"]
