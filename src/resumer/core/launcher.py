"""Hand the resolved session over to the external tool (``claude``)."""
from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from typing import Optional, Sequence

from resumer.core.exceptions import LaunchError
from resumer.core.session.resolver import Resolution, SessionAction

logger = logging.getLogger(__name__)


class SessionLauncher:
    """Build and run the external tool's command line for a Resolution.

    resume -> ``claude -r <uuid>``; create -> ``claude --session-id <uuid>``.
    """

    def __init__(
        self,
        command: str = "claude",
        *,
        resume_args: Sequence[str] = ("-r",),
        create_args: Sequence[str] = ("--session-id",),
        replace_process: bool = True,
    ) -> None:
        self.command = command
        self.resume_args = tuple(resume_args)
        self.create_args = tuple(create_args)
        self.replace_process = replace_process

    @classmethod
    def from_config(cls, config=None) -> "SessionLauncher":
        from resumer.core.config.domains.launcher import LauncherConfig

        cfg = config if config is not None else LauncherConfig()
        return cls(
            cfg.command,
            resume_args=cfg.resume_args,
            create_args=cfg.create_args,
            replace_process=cfg.replace_process,
        )

    def build_argv(self, resolution: Resolution) -> list[str]:
        flags = self.resume_args if resolution.action is SessionAction.RESUME else self.create_args
        return [self.command, *flags, resolution.session_id]

    def resolve_executable(self) -> str:
        """Return the absolute path of the external tool.

        Raises:
            LaunchError: If the command is not on PATH.
        """
        found = shutil.which(self.command)
        if found is None:
            raise LaunchError(
                f"Error launching {self.command}: command not found on PATH",
                context={"command": self.command},
            )
        return found

    def launch(self, resolution: Resolution, executable: Optional[str] = None) -> int:
        """Run the external tool for ``resolution``.

        With ``replace_process`` (and a platform that supports it) the current
        process image is replaced and this call never returns. Otherwise the
        tool runs as a child and its exit status is returned, as 128 + N when
        the child was killed by signal N.

        Raises:
            LaunchError: If the tool cannot be located or executed.
        """
        path = executable or self.resolve_executable()
        argv = self.build_argv(resolution)
        logger.debug("launch %s (%s)", argv, "exec" if self._use_exec() else "spawn")

        # Anything still buffered would be discarded by exec.
        sys.stdout.flush()
        sys.stderr.flush()

        try:
            if self._use_exec():
                os.execv(path, argv)
            proc = subprocess.run([path, *argv[1:]])
        except OSError as exc:
            raise LaunchError(
                f"Error launching {self.command}: {exc}",
                context={"command": self.command, "argv": argv},
            ) from exc
        code = int(proc.returncode)
        return 128 - code if code < 0 else code

    def _use_exec(self) -> bool:
        return self.replace_process and os.name == "posix" and hasattr(os, "execv")


__all__ = ["SessionLauncher"]
