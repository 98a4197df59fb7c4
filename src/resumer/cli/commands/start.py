"""
cs (default action): start or resume the session for folder+branch.
"""
from __future__ import annotations

import argparse
import logging

from resumer.cli._output import OutputFormatter
from resumer.core.config import LauncherConfig, RegistryConfig, SessionConfig, TimeoutsConfig
from resumer.core.launcher import SessionLauncher
from resumer.core.session import (
    SessionAction,
    SessionMode,
    SessionRegistry,
    SessionResolver,
    detect_project_key,
    resolve_namespace,
)

from ._common import get_config

logger = logging.getLogger(__name__)


def mode_from_args(args: argparse.Namespace) -> SessionMode:
    if getattr(args, "force", False):
        return SessionMode.FORCE
    if getattr(args, "reset", False):
        return SessionMode.RESET
    return SessionMode.NORMAL


def main(args: argparse.Namespace) -> int:
    """Resolve the session for the current checkout and launch Claude Code."""
    formatter = OutputFormatter(json_mode=bool(getattr(args, "json", False)))
    dry_run = bool(getattr(args, "dry_run", False))
    config = get_config(args)

    # Configuration errors surface before anything is derived.
    namespace = resolve_namespace(SessionConfig(config).namespace)
    key = detect_project_key(timeout=TimeoutsConfig(config).git_operations_seconds)

    registry = SessionRegistry.from_config(RegistryConfig(config))
    resolver = SessionResolver(registry, namespace)
    resolution = resolver.plan(key, mode_from_args(args))

    launcher = SessionLauncher.from_config(LauncherConfig(config))
    executable = None if dry_run else launcher.resolve_executable()

    resolver.commit(resolution)

    if formatter.json_mode:
        formatter.json_output(
            {
                **resolution.to_dict(),
                "dry_run": dry_run,
                "registry": str(registry.path),
                "argv": launcher.build_argv(resolution),
            }
        )
    else:
        formatter.session_banner(
            session=str(resolution.key),
            uuid=resolution.session_id,
            status=resolution.status,
        )

    if dry_run:
        logger.debug("dry run: not launching %s", launcher.command)
        return 0

    if resolution.action is SessionAction.RESUME:
        formatter.text("Resuming session...")
    else:
        formatter.text("Creating session...")
    return launcher.launch(resolution, executable=executable)
