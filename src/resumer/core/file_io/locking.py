"""Advisory file locking for read-modify-write cycles."""
from __future__ import annotations

import fcntl
import time
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional

from .utils import ensure_parent_dir


class LockTimeoutError(TimeoutError):
    """Raised when an OS file lock cannot be acquired within timeout."""


def lock_path_for(target: Path | str) -> Path:
    """Return the sidecar lock file used for ``target``."""
    target = Path(target)
    return target.with_name(target.name + ".lock")


def _validate_positive(name: str, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive (got {value})")


@contextmanager
def acquire_file_lock(
    file_path: Path | str,
    timeout: float = 5.0,
    *,
    poll_interval: float = 0.05,
) -> Iterator[Optional[IO[str]]]:
    """Acquire an exclusive lock guarding ``file_path`` with a timeout.

    - Uses ``fcntl.flock`` with ``LOCK_EX | LOCK_NB`` in a retry loop.
    - The lock is taken on a sidecar ``<file>.lock`` so the guarded file itself
      can be atomically replaced while the lock is held.

    Args:
        file_path: File whose mutations are being serialized.
        timeout: Maximum seconds to wait before raising ``LockTimeoutError``.
        poll_interval: Sleep duration between non-blocking attempts.

    Yields:
        The opened lock file, held for the duration of the context.
    """
    _validate_positive("timeout", timeout)
    _validate_positive("poll_interval", poll_interval)

    target = Path(file_path)
    lock_target = lock_path_for(target)
    ensure_parent_dir(lock_target)

    start = time.monotonic()
    fh = open(lock_target, "a+")
    acquired = False
    try:
        while True:
            try:
                fcntl.flock(fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
                acquired = True
                break
            except OSError:
                if (time.monotonic() - start) >= timeout:
                    raise LockTimeoutError(
                        f"Could not acquire lock on {target} within {timeout}s"
                    )
                time.sleep(poll_interval)

        yield fh
    finally:
        try:
            if acquired:
                fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
        finally:
            fh.close()


__all__ = ["LockTimeoutError", "acquire_file_lock", "lock_path_for"]
