from __future__ import annotations

"""Lightweight git helpers used to build the project key."""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from resumer.core.exceptions import ContextError

from .subprocess import run_with_timeout

logger = logging.getLogger(__name__)


def _starting_path(start_path: Optional[Path | str]) -> Path:
    if start_path is None:
        return Path.cwd()
    return Path(start_path)


def _git(args: list[str], cwd: Path, timeout: Optional[float]) -> subprocess.CompletedProcess:
    return run_with_timeout(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        timeout_type="git_operations",
    )


def get_current_branch(
    start_path: Optional[Path | str] = None,
    *,
    timeout: Optional[float] = None,
) -> str:
    """Return the current branch name for the checkout containing ``start_path``.

    Uses ``git rev-parse --abbrev-ref HEAD``. A freshly initialised repository
    has no commit for HEAD to resolve to, so ``git symbolic-ref --short HEAD``
    is consulted before giving up. A detached HEAD reports ``HEAD``.

    Raises:
        ContextError: If git is missing, times out, or ``start_path`` is not
            inside a git working tree.
    """
    cwd = _starting_path(start_path)
    try:
        result = _git(["rev-parse", "--abbrev-ref", "HEAD"], cwd, timeout)
        if result.returncode != 0:
            logger.debug("rev-parse failed (%s): %s", result.returncode, (result.stderr or "").strip())
            result = _git(["symbolic-ref", "--short", "HEAD"], cwd, timeout)
    except FileNotFoundError as exc:
        raise ContextError(
            "Failed to execute git command (is git installed?)",
            context={"cwd": str(cwd)},
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise ContextError(
            f"git timed out after {exc.timeout}s",
            context={"cwd": str(cwd)},
        ) from exc

    branch = (result.stdout or "").strip()
    if result.returncode != 0 or not branch:
        raise ContextError(
            "Not a git repository or no branch found",
            context={"cwd": str(cwd), "stderr": (result.stderr or "").strip()},
        )
    return branch


__all__ = ["get_current_branch"]
