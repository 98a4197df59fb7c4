from __future__ import annotations

from typing import Any, Dict, Mapping


class ResumerError(Exception):
    """Base exception for claude-code-resumer."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ContextError(ResumerError, RuntimeError):
    """Raised when the project name or branch cannot be determined."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ResumerError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class ConfigError(ResumerError, ValueError):
    """Raised for unreadable or invalid configuration."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ResumerError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class NamespaceError(ConfigError):
    """Raised when a namespace override is not a valid UUID."""


class RegistryError(ResumerError):
    """Raised when the session registry cannot be read or written."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        operation: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)


class LaunchError(ResumerError, RuntimeError):
    """Raised when the external tool cannot be located or executed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ResumerError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


__all__ = [
    "ResumerError",
    "ContextError",
    "ConfigError",
    "NamespaceError",
    "RegistryError",
    "LaunchError",
]
