"""File I/O utilities for line-oriented text stores.

Single source of truth for safe file access patterns:
- Atomic rewrites with fsync
- Whole-line appends that never fuse with a torn previous line
- Reads that fail fast on anything other than a missing file

Two read flavours exist. :func:`read_lines` is for interpreting a file
(stripped, blank lines dropped, undecodable bytes replaced).
:func:`read_raw_lines` is for rewriting one: bytes that are not UTF-8 survive
through ``surrogateescape`` and line terminators are kept, so writing the
result back with :func:`atomic_write_text` reproduces the file exactly.
"""
from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, TextIO, Union

PathLike = Union[str, Path]

RAW_ERRORS = "surrogateescape"


def ensure_parent_dir(path: PathLike) -> Path:
    """Ensure the parent directory for ``path`` exists and return it.

    Creation failures propagate as :class:`OSError`.
    """
    parent = Path(path).parent
    parent.mkdir(parents=True, exist_ok=True)
    return parent


def _atomic_write(
    path: Path,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
    errors: str = RAW_ERRORS,
) -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    - Parent directory is created if missing
    - Data is written to a temporary file in the same directory, with no
      newline translation
    - File is fsync'd, then atomically replaced
    - Any leftover temp file is cleaned up on failure
    """
    path = Path(path)
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            errors=errors,
            newline="",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                # Best-effort cleanup; the original file is untouched
                pass


def atomic_write_text(path: PathLike, text: str) -> None:
    """Atomically replace ``path`` with ``text``, written verbatim.

    Surrogate-escaped characters from :func:`read_raw_lines` are written back
    as the original bytes.
    """

    def _writer(f: TextIO) -> None:
        f.write(text)

    _atomic_write(Path(path), _writer)


def _ends_with_newline(path: Path) -> bool:
    """Return True when ``path`` is empty, missing, or its last byte is a newline."""
    try:
        with open(path, "rb") as f:
            f.seek(0, os.SEEK_END)
            if f.tell() == 0:
                return True
            f.seek(-1, os.SEEK_END)
            return f.read(1) == b"\n"
    except FileNotFoundError:
        return True


def append_line(path: PathLike, line: str) -> None:
    """Append ``line`` plus a newline to ``path``, creating it if needed.

    If the file does not end with a newline (an interrupted earlier write), a
    newline is written first so the torn fragment stays a line of its own.
    The write is flushed and fsync'd before returning.
    """
    target = Path(path)
    ensure_parent_dir(target)

    prefix = "" if _ends_with_newline(target) else "\n"
    with open(target, "a", encoding="utf-8") as f:
        fcntl.flock(f.fileno(), fcntl.LOCK_EX)
        try:
            f.write(f"{prefix}{line}\n")
            f.flush()
            os.fsync(f.fileno())
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)


def _read_text(path: PathLike, *, errors: str, newline: Optional[str]) -> Optional[str]:
    try:
        with open(path, "r", encoding="utf-8", errors=errors, newline=newline) as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH)
            try:
                return f.read()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except FileNotFoundError:
        return None


def read_lines(path: PathLike) -> List[str]:
    """Read ``path`` and return its stripped, non-empty lines in file order.

    - A missing file yields an empty list
    - Any other I/O error (permissions, is-a-directory) propagates
    - Undecodable bytes are replaced rather than raising, so a damaged line
      only affects itself
    """
    raw = _read_text(path, errors="replace", newline=None)
    if raw is None:
        return []
    return [ln.strip() for ln in raw.splitlines() if ln.strip()]


def read_raw_lines(path: PathLike) -> List[str]:
    """Read ``path`` as-is: every ``\\n``-terminated line, blanks included.

    ``"".join(read_raw_lines(p))`` re-encodes (with ``surrogateescape``) to the
    file's exact bytes. A missing file yields an empty list.
    """
    raw = _read_text(path, errors=RAW_ERRORS, newline="")
    if raw is None:
        return []
    parts = raw.split("\n")
    lines = [f"{part}\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "atomic_write_text",
    "append_line",
    "read_lines",
    "read_raw_lines",
]
