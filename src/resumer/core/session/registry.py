"""Local session registry: the set of identifiers created on this machine.

The registry is a newline-delimited text file (default ``~/.cs/sessions``),
one canonical identifier per line, no header. It stores no link back to the
project key; the key -> identifier mapping is recomputed on every run.

Mutations follow one pattern: take the sidecar lock, read everything, then
either append a whole line or atomically rewrite the file. An interrupted
write can therefore only leave a partial line, which reads as malformed and
is skipped.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List

from resumer.core.exceptions import RegistryError
from resumer.core.file_io import (
    LockTimeoutError,
    acquire_file_lock,
    append_line,
    atomic_write_text,
    ensure_parent_dir,
    read_lines,
    read_raw_lines,
)

from .id import is_session_id

logger = logging.getLogger(__name__)


class SessionRegistry:
    """File-backed set of known session identifiers."""

    def __init__(
        self,
        path: Path | str,
        *,
        lock_timeout: float = 5.0,
        lock_poll_interval: float = 0.05,
    ) -> None:
        self._path = Path(path)
        self._lock_timeout = lock_timeout
        self._lock_poll_interval = lock_poll_interval

    @classmethod
    def from_config(cls, config=None) -> "SessionRegistry":
        """Build a registry from a :class:`RegistryConfig` (loaded if None)."""
        from resumer.core.config.domains.registry import RegistryConfig

        cfg = config if config is not None else RegistryConfig()
        return cls(
            cfg.path,
            lock_timeout=cfg.lock_timeout_seconds,
            lock_poll_interval=cfg.lock_poll_interval_seconds,
        )

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return f"SessionRegistry({str(self._path)!r})"

    # ---------- Internals ----------

    def _read_raw(self, *, verbatim: bool = False) -> List[str]:
        try:
            if verbatim:
                return read_raw_lines(self._path)
            return read_lines(self._path)
        except OSError as exc:
            raise RegistryError(
                f"Cannot read session database {self._path}: {exc.strerror or exc}",
                path=str(self._path),
                operation="read",
            ) from exc

    @contextmanager
    def _transaction(self, operation: str, *, verbatim: bool = False) -> Iterator[List[str]]:
        """Hold the registry lock and yield the current lines.

        ``verbatim`` yields them untouched (see :func:`read_raw_lines`) for
        callers that rewrite the file.
        """
        try:
            ensure_parent_dir(self._path)
        except OSError as exc:
            raise RegistryError(
                f"Cannot create directory for session database {self._path}: {exc.strerror or exc}",
                path=str(self._path),
                operation=operation,
            ) from exc

        try:
            with acquire_file_lock(
                self._path,
                timeout=self._lock_timeout,
                poll_interval=self._lock_poll_interval,
            ):
                yield self._read_raw(verbatim=verbatim)
        except LockTimeoutError as exc:
            raise RegistryError(
                str(exc), path=str(self._path), operation=operation
            ) from exc
        except OSError as exc:
            raise RegistryError(
                f"Cannot write session database {self._path}: {exc.strerror or exc}",
                path=str(self._path),
                operation=operation,
            ) from exc

    # ---------- Queries ----------

    def list(self) -> List[str]:
        """Return stored identifiers in insertion order.

        Malformed lines are skipped; a duplicated identifier (left by a
        concurrent append) is reported once, at its first position.
        """
        seen: set[str] = set()
        entries: List[str] = []
        for lineno, line in enumerate(self._read_raw(), start=1):
            if not is_session_id(line):
                logger.warning("Skipping malformed line %d in %s", lineno, self._path)
                continue
            if line in seen:
                continue
            seen.add(line)
            entries.append(line)
        return entries

    def contains(self, session_id: str) -> bool:
        """Return True iff a stored line equals ``session_id`` exactly."""
        return session_id in self.list()

    def __contains__(self, session_id: object) -> bool:
        return isinstance(session_id, str) and self.contains(session_id)

    def __iter__(self) -> Iterator[str]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self.list())

    # ---------- Mutations ----------

    def insert(self, session_id: str) -> bool:
        """Append ``session_id`` unless already present.

        Returns:
            True if a line was appended, False if it was already registered.
        """
        with self._transaction("insert") as lines:
            if session_id in lines:
                logger.debug("registry: %s already present", session_id)
                return False
            append_line(self._path, session_id)
        logger.debug("registry: inserted %s", session_id)
        return True

    def remove(self, session_id: str) -> bool:
        """Rewrite the registry without ``session_id``.

        Every other line is written back byte-for-byte: malformed lines,
        blank lines, padding and undecodable bytes included. A missing file or
        an absent identifier is a no-op.

        Returns:
            True if at least one line was removed.
        """
        if not self._path.exists():
            return False
        with self._transaction("remove", verbatim=True) as lines:
            kept = [line for line in lines if line.strip() != session_id]
            if len(kept) == len(lines):
                return False
            atomic_write_text(self._path, "".join(kept))
        logger.debug("registry: removed %s", session_id)
        return True

    def clear(self) -> bool:
        """Delete the registry file.

        Returns:
            True if a file was deleted, False if there was nothing to clear.
        """
        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise RegistryError(
                f"Error clearing database: {exc.strerror or exc}",
                path=str(self._path),
                operation="clear",
            ) from exc
        logger.debug("registry: cleared %s", self._path)
        return True


__all__ = ["SessionRegistry"]
