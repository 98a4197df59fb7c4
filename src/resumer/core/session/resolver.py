"""Resume-or-create decision for a project key.

Modes:
- NORMAL: resume when the identifier is registered, otherwise create and
  register it.
- FORCE: always create; the registry is neither read nor written, so a
  forced session is never auto-resumed later.
- RESET: drop the identifier from the registry, then create and register it.

Deciding (:meth:`SessionResolver.plan`) is separate from persisting
(:meth:`SessionResolver.commit`) so the registry is only written once the
caller has committed to the launch. Dry-run still commits; only the launch
itself is skipped.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .id import DEFAULT_NAMESPACE, derive_session_id
from .key import ProjectKey
from .registry import SessionRegistry

logger = logging.getLogger(__name__)


class SessionMode(str, Enum):
    NORMAL = "normal"
    FORCE = "force"
    RESET = "reset"


class SessionAction(str, Enum):
    RESUME = "resume"
    CREATE = "create"


STATUS_EXISTS = "exists"
STATUS_NEW = "new"
STATUS_FORCE_CREATE = "force-create"
STATUS_RESET = "reset"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a project key: what to launch and how."""

    key: ProjectKey
    session_id: str
    action: SessionAction
    mode: SessionMode
    status: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session": str(self.key),
            "project": self.key.project,
            "branch": self.key.branch,
            "uuid": self.session_id,
            "action": self.action.value,
            "mode": self.mode.value,
            "status": self.status,
        }


class SessionResolver:
    """Combine identity derivation and the registry into a launch decision."""

    def __init__(self, registry: SessionRegistry, namespace: uuid.UUID = DEFAULT_NAMESPACE) -> None:
        self.registry = registry
        self.namespace = namespace

    def derive(self, key: ProjectKey) -> str:
        return derive_session_id(str(key), self.namespace)

    def plan(self, key: ProjectKey, mode: SessionMode = SessionMode.NORMAL) -> Resolution:
        """Decide the action for ``key`` without touching the registry file."""
        session_id = self.derive(key)

        if mode is SessionMode.FORCE:
            action, status = SessionAction.CREATE, STATUS_FORCE_CREATE
        elif mode is SessionMode.RESET:
            action, status = SessionAction.CREATE, STATUS_RESET
        elif self.registry.contains(session_id):
            action, status = SessionAction.RESUME, STATUS_EXISTS
        else:
            action, status = SessionAction.CREATE, STATUS_NEW

        logger.debug("plan %s (%s): %s -> %s", key, mode.value, session_id, action.value)
        return Resolution(key=key, session_id=session_id, action=action, mode=mode, status=status)

    def commit(self, resolution: Resolution) -> None:
        """Apply the registry side effects of ``resolution``.

        NORMAL/create inserts; RESET removes then inserts; FORCE and resume
        leave the registry untouched.
        """
        if resolution.mode is SessionMode.FORCE or resolution.action is SessionAction.RESUME:
            return
        if resolution.mode is SessionMode.RESET:
            self.registry.remove(resolution.session_id)
        self.registry.insert(resolution.session_id)

    def resolve(self, key: ProjectKey, mode: SessionMode = SessionMode.NORMAL) -> Resolution:
        """Plan and commit in one step."""
        resolution = self.plan(key, mode)
        self.commit(resolution)
        return resolution


__all__ = [
    "SessionMode",
    "SessionAction",
    "Resolution",
    "SessionResolver",
    "STATUS_EXISTS",
    "STATUS_NEW",
    "STATUS_FORCE_CREATE",
    "STATUS_RESET",
]
