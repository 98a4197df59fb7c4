from __future__ import annotations

import sys

import pytest

from resumer.core.utils.subprocess import configured_timeout, run_with_timeout


def test_configured_default() -> None:
    assert configured_timeout() == 10.0
    assert configured_timeout("git_operations") == 10.0


def test_configured_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CS_TIMEOUTS__GIT_OPERATIONS_SECONDS", "4")
    assert configured_timeout("git_operations") == 4.0


def test_unknown_bucket() -> None:
    with pytest.raises(ValueError):
        configured_timeout("network")


def test_run_with_timeout_passes_through() -> None:
    result = run_with_timeout(
        [sys.executable, "-c", "print('ok')"], capture_output=True, text=True, timeout=30
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "ok"


def test_run_with_timeout_stringifies_path_arguments(tmp_path) -> None:
    marker = tmp_path / "marker.txt"
    result = run_with_timeout(
        [sys.executable, "-c", "import sys; open(sys.argv[1], 'w').write('x')", marker],
        capture_output=True,
        timeout=30,
    )
    assert result.returncode == 0
    assert marker.read_text() == "x"
