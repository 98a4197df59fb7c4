"""Project keys: ``<folder>+<branch>``."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from resumer.core.exceptions import ContextError
from resumer.core.utils.git import get_current_branch

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "+"


@dataclass(frozen=True)
class ProjectKey:
    """Folder name and branch identifying one unit of work.

    Both parts must be non-empty: a blank component would silently map a
    checkout onto somebody else's session.
    """

    project: str
    branch: str

    def __post_init__(self) -> None:
        if not self.project:
            raise ContextError("Failed to get folder name", context={"branch": self.branch})
        if not self.branch:
            raise ContextError("No branch found", context={"project": self.project})

    def __str__(self) -> str:
        return f"{self.project}{KEY_SEPARATOR}{self.branch}"


def get_folder_name(cwd: Optional[Path] = None) -> str:
    """Return the final path segment of ``cwd`` (default: current directory)."""
    try:
        path = cwd if cwd is not None else Path.cwd()
    except OSError as exc:
        raise ContextError(f"Failed to get current directory: {exc}") from exc

    name = Path(path).name
    if not name:
        raise ContextError("Failed to get folder name", context={"cwd": str(path)})
    return name


def detect_project_key(cwd: Optional[Path] = None, *, timeout: Optional[float] = None) -> ProjectKey:
    """Build the project key for ``cwd`` from its folder name and git branch.

    Raises:
        ContextError: If either component cannot be determined.
    """
    project = get_folder_name(cwd)
    branch = get_current_branch(cwd, timeout=timeout)
    key = ProjectKey(project=project, branch=branch)
    logger.debug("project key: %s", key)
    return key


__all__ = ["KEY_SEPARATOR", "ProjectKey", "get_folder_name", "detect_project_key"]
