import os
import shutil
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'resumer' and tests/ importable as 'tests'
for p in (SRC_ROOT, REPO_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from resumer.core.session import SessionRegistry  # noqa: E402
from resumer.core.stdlib_logging import reset_logging  # noqa: E402
from tests.helpers.git_helpers import git_commit, git_init  # noqa: E402


def pytest_collection_modifyitems(config, items):  # type: ignore[no-untyped-def]
    if shutil.which("git") is not None:
        return
    skip_git = pytest.mark.skip(reason="git binary not available")
    for item in items:
        if "requires_git" in item.keywords:
            item.add_marker(skip_git)


@pytest.fixture(autouse=True)
def isolated_home(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point HOME at a temp dir and drop every CS_* override.

    The registry (~/.cs/sessions) and user config (~/.cs/config.yaml) then
    live inside a per-test temp dir kept separate from tmp_path.
    """
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("CS_"):
            monkeypatch.delenv(key, raising=False)
    yield home
    reset_logging()


@pytest.fixture
def registry_path(isolated_home: Path) -> Path:
    return isolated_home / ".cs" / "sessions"


@pytest.fixture
def registry(registry_path: Path) -> SessionRegistry:
    return SessionRegistry(registry_path, lock_timeout=1.0, lock_poll_interval=0.01)


@pytest.fixture
def git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A real git checkout named ``my-app`` on branch ``main`` with one commit."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    repo = tmp_path / "my-app"
    repo.mkdir()
    git_init(repo, branch="main")
    (repo / "README.md").write_text("# my-app\n", encoding="utf-8")
    git_commit(repo, "init")
    return repo
