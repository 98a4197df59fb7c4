"""Deterministic session identifiers.

A session identifier is the RFC 4122 version-5 UUID of the project key under
a namespace: SHA-1 over ``namespace.bytes + key.encode("utf-8")``, truncated
to 16 bytes, with the version and variant bits overwritten. The canonical
36-character lowercase form is used everywhere (registry file, logs, argv),
so the bit layout must never change: existing registries and Claude Code
sessions are addressed by it.
"""
from __future__ import annotations

import re
import uuid
from typing import Optional, Union

from resumer.core.exceptions import NamespaceError

# RFC 4122 DNS namespace: 6ba7b810-9dad-11d1-80b4-00c04fd430c8
DEFAULT_NAMESPACE: uuid.UUID = uuid.NAMESPACE_DNS

SESSION_ID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)

NamespaceLike = Union[uuid.UUID, bytes]


def _namespace_uuid(namespace: NamespaceLike) -> uuid.UUID:
    if isinstance(namespace, uuid.UUID):
        return namespace
    if isinstance(namespace, (bytes, bytearray)) and len(namespace) == 16:
        return uuid.UUID(bytes=bytes(namespace))
    raise TypeError("namespace must be a uuid.UUID or exactly 16 bytes")


def derive_session_id(key: str, namespace: NamespaceLike = DEFAULT_NAMESPACE) -> str:
    """Return the canonical session identifier for ``key`` under ``namespace``.

    Total and pure: an empty key still yields a well-formed identifier, so
    callers must reject empty project keys themselves.

    Example:
        >>> derive_session_id("claude-code-resumer+main")
        'afe19c61-d53f-581c-985c-56e9daf4e63d'
    """
    return str(uuid.uuid5(_namespace_uuid(namespace), key))


def parse_namespace(text: str) -> uuid.UUID:
    """Parse a namespace override.

    Accepts the canonical hyphenated form, 32 bare hex digits, and the
    ``{...}`` / ``urn:uuid:`` spellings.

    Raises:
        NamespaceError: If ``text`` is not a UUID.
    """
    try:
        return uuid.UUID(text.strip())
    except (ValueError, AttributeError) as exc:
        raise NamespaceError(
            f"Invalid namespace {text!r}: expected a UUID such as "
            f"'{DEFAULT_NAMESPACE}'",
            context={"namespace": str(text)},
        ) from exc


def resolve_namespace(raw: Optional[str]) -> uuid.UUID:
    """Return the active namespace: ``raw`` parsed, or the default when unset."""
    if raw is None or not raw.strip():
        return DEFAULT_NAMESPACE
    return parse_namespace(raw)


def is_session_id(text: str) -> bool:
    """Return True if ``text`` is a canonical 8-4-4-4-12 hex identifier."""
    return SESSION_ID_RE.fullmatch(text) is not None


__all__ = [
    "DEFAULT_NAMESPACE",
    "derive_session_id",
    "parse_namespace",
    "resolve_namespace",
    "is_session_id",
]
