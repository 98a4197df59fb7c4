"""File I/O primitives: atomic rewrites, line appends and advisory locks."""
from .locking import LockTimeoutError, acquire_file_lock
from .utils import (
    PathLike,
    append_line,
    atomic_write_text,
    ensure_parent_dir,
    read_lines,
    read_raw_lines,
)

__all__ = [
    "LockTimeoutError",
    "acquire_file_lock",
    "PathLike",
    "append_line",
    "atomic_write_text",
    "ensure_parent_dir",
    "read_lines",
    "read_raw_lines",
]
