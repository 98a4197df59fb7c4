from __future__ import annotations

import logging
import threading
from pathlib import Path

import pytest

from resumer.core.exceptions import RegistryError
from resumer.core.file_io import acquire_file_lock
from resumer.core.session import SessionRegistry, derive_session_id

ID_A = derive_session_id("app-a+main")
ID_B = derive_session_id("app-b+main")
ID_C = derive_session_id("app-c+dev")


def test_missing_file_reads_as_empty(registry: SessionRegistry, registry_path: Path) -> None:
    assert not registry_path.exists()
    assert registry.list() == []
    assert registry.contains(ID_A) is False
    assert len(registry) == 0


def test_insert_creates_directory_and_file(registry: SessionRegistry, registry_path: Path) -> None:
    assert registry.insert(ID_A) is True
    assert registry_path.read_text(encoding="utf-8") == f"{ID_A}\n"
    assert registry.contains(ID_A)
    assert ID_A in registry


def test_insert_is_idempotent(registry: SessionRegistry, registry_path: Path) -> None:
    assert registry.insert(ID_A) is True
    assert registry.insert(ID_A) is False
    assert registry_path.read_text(encoding="utf-8").count(ID_A) == 1


def test_list_preserves_insertion_order(registry: SessionRegistry) -> None:
    for sid in (ID_B, ID_A, ID_C):
        registry.insert(sid)
    assert registry.list() == [ID_B, ID_A, ID_C]
    assert list(registry) == [ID_B, ID_A, ID_C]


def test_contains_is_exact_line_match(registry: SessionRegistry, registry_path: Path) -> None:
    registry_path.parent.mkdir(parents=True)
    registry_path.write_text(f"prefix-{ID_A}\n{ID_A.upper()}\n", encoding="utf-8")
    assert registry.contains(ID_A) is False


def test_surrounding_whitespace_and_blank_lines_ignored(
    registry: SessionRegistry, registry_path: Path
) -> None:
    registry_path.parent.mkdir(parents=True)
    registry_path.write_text(f"\n  {ID_A}  \n\n{ID_B}\r\n", encoding="utf-8")
    assert registry.list() == [ID_A, ID_B]


def test_malformed_lines_skipped_with_warning(
    registry: SessionRegistry, registry_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    registry_path.parent.mkdir(parents=True)
    registry_path.write_text(f"{ID_A}\nnot-a-uuid\n{ID_B[:20]}\n{ID_B}\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="resumer"):
        assert registry.list() == [ID_A, ID_B]
    assert "malformed line 2" in caplog.text
    assert "malformed line 3" in caplog.text


def test_duplicates_listed_once(registry: SessionRegistry, registry_path: Path) -> None:
    registry_path.parent.mkdir(parents=True)
    registry_path.write_text(f"{ID_A}\n{ID_B}\n{ID_A}\n", encoding="utf-8")
    assert registry.list() == [ID_A, ID_B]
    assert len(registry) == 2


def test_append_after_torn_line_starts_new_line(
    registry: SessionRegistry, registry_path: Path
) -> None:
    registry_path.parent.mkdir(parents=True)
    registry_path.write_text(f"{ID_A}\n{ID_B[:10]}", encoding="utf-8")
    registry.insert(ID_C)
    assert registry_path.read_text(encoding="utf-8") == f"{ID_A}\n{ID_B[:10]}\n{ID_C}\n"
    assert registry.list() == [ID_A, ID_C]


def test_remove_keeps_other_lines_in_order(registry: SessionRegistry, registry_path: Path) -> None:
    registry_path.parent.mkdir(parents=True)
    registry_path.write_text(f"{ID_A}\ngarbage\n{ID_B}\n{ID_C}\n", encoding="utf-8")
    assert registry.remove(ID_B) is True
    assert registry_path.read_text(encoding="utf-8") == f"{ID_A}\ngarbage\n{ID_C}\n"


def test_remove_leaves_other_lines_byte_for_byte(
    registry: SessionRegistry, registry_path: Path
) -> None:
    registry_path.parent.mkdir(parents=True)
    registry_path.write_bytes(
        ID_A.encode() + b"\n  note \xe9t\xe9  \n\n" + ID_B.encode() + b"\r\n" + ID_C.encode() + b"\n"
    )
    assert registry.remove(ID_B) is True
    assert registry_path.read_bytes() == ID_A.encode() + b"\n  note \xe9t\xe9  \n\n" + ID_C.encode() + b"\n"


def test_remove_matches_padded_line(registry: SessionRegistry, registry_path: Path) -> None:
    registry_path.parent.mkdir(parents=True)
    registry_path.write_text(f"{ID_A}\n  {ID_B}  \n", encoding="utf-8")
    assert registry.remove(ID_B) is True
    assert registry_path.read_text(encoding="utf-8") == f"{ID_A}\n"


def test_remove_drops_every_duplicate(registry: SessionRegistry, registry_path: Path) -> None:
    registry_path.parent.mkdir(parents=True)
    registry_path.write_text(f"{ID_A}\n{ID_B}\n{ID_A}\n", encoding="utf-8")
    assert registry.remove(ID_A) is True
    assert registry.list() == [ID_B]


def test_remove_absent_is_noop(registry: SessionRegistry, registry_path: Path) -> None:
    registry.insert(ID_A)
    before = registry_path.read_text(encoding="utf-8")
    assert registry.remove(ID_B) is False
    assert registry_path.read_text(encoding="utf-8") == before


def test_remove_on_missing_file_creates_nothing(
    registry: SessionRegistry, registry_path: Path
) -> None:
    assert registry.remove(ID_A) is False
    assert not registry_path.exists()
    assert not registry_path.parent.exists()


def test_remove_last_entry_leaves_empty_file(registry: SessionRegistry, registry_path: Path) -> None:
    registry.insert(ID_A)
    registry.remove(ID_A)
    assert registry_path.exists()
    assert registry_path.read_text(encoding="utf-8") == ""
    assert registry.list() == []


def test_remove_leaves_no_temp_files(registry: SessionRegistry, registry_path: Path) -> None:
    registry.insert(ID_A)
    registry.insert(ID_B)
    registry.remove(ID_A)
    leftovers = [p.name for p in registry_path.parent.iterdir() if p.name.startswith(".sessions.")]
    assert leftovers == []


def test_clear(registry: SessionRegistry, registry_path: Path) -> None:
    registry.insert(ID_A)
    assert registry.clear() is True
    assert not registry_path.exists()
    assert registry.list() == []


def test_clear_when_missing(registry: SessionRegistry) -> None:
    assert registry.clear() is False


def test_unreadable_registry_is_error(registry_path: Path) -> None:
    # A directory in place of the file cannot be read, even as root.
    registry_path.mkdir(parents=True)
    reg = SessionRegistry(registry_path, lock_timeout=1.0, lock_poll_interval=0.01)
    with pytest.raises(RegistryError) as excinfo:
        reg.list()
    assert excinfo.value.context == {"path": str(registry_path), "operation": "read"}


def test_unwritable_directory_is_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    reg = SessionRegistry(blocker / "sessions", lock_timeout=1.0, lock_poll_interval=0.01)
    with pytest.raises(RegistryError) as excinfo:
        reg.insert(ID_A)
    assert excinfo.value.context["operation"] == "insert"


def test_lock_contention_times_out(registry_path: Path) -> None:
    reg = SessionRegistry(registry_path, lock_timeout=0.1, lock_poll_interval=0.01)
    with acquire_file_lock(registry_path, timeout=1.0):
        with pytest.raises(RegistryError, match="Could not acquire lock"):
            reg.insert(ID_A)
    assert reg.list() == []


def test_concurrent_inserts_of_same_id_keep_one_line(registry_path: Path) -> None:
    errors: list[BaseException] = []

    def worker() -> None:
        try:
            SessionRegistry(registry_path, lock_timeout=10.0, lock_poll_interval=0.005).insert(ID_A)
        except BaseException as exc:  # pragma: no cover - surfaced below
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert registry_path.read_text(encoding="utf-8") == f"{ID_A}\n"


def test_from_config_uses_configured_path(registry_path: Path) -> None:
    from resumer.core.config import RegistryConfig

    cfg = {"registry": {"path": str(registry_path), "lock_timeout_seconds": 2, "lock_poll_interval_seconds": 0.1}}
    reg = SessionRegistry.from_config(RegistryConfig(cfg))
    assert reg.path == registry_path
