"""Domain-specific configuration for launching the external tool."""
from __future__ import annotations

from functools import cached_property
from typing import Tuple

from ..base import BaseDomainConfig


class LauncherConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "launcher"

    @cached_property
    def command(self) -> str:
        return str(self.section.get("command", "claude"))

    @cached_property
    def resume_args(self) -> Tuple[str, ...]:
        return tuple(str(a) for a in self.section.get("resume_args", ["-r"]))

    @cached_property
    def create_args(self) -> Tuple[str, ...]:
        return tuple(str(a) for a in self.section.get("create_args", ["--session-id"]))

    @cached_property
    def replace_process(self) -> bool:
        return bool(self.section.get("replace_process", True))


__all__ = ["LauncherConfig"]
