"""Session identity: project keys, identifiers, the registry and the resolver."""
from .id import (
    DEFAULT_NAMESPACE,
    derive_session_id,
    is_session_id,
    parse_namespace,
    resolve_namespace,
)
from .key import ProjectKey, detect_project_key
from .registry import SessionRegistry
from .resolver import Resolution, SessionAction, SessionMode, SessionResolver

__all__ = [
    "DEFAULT_NAMESPACE",
    "derive_session_id",
    "is_session_id",
    "parse_namespace",
    "resolve_namespace",
    "ProjectKey",
    "detect_project_key",
    "SessionRegistry",
    "Resolution",
    "SessionAction",
    "SessionMode",
    "SessionResolver",
]
