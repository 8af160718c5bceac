import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'forklaunch' and the repo root importable for 'tests.helpers'
for p in (SRC_ROOT, REPO_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from forklaunch.core.config.cache import clear_all_caches
from forklaunch.core.logs import reset_stdlib_logging_for_tests
from forklaunch.data import clear_caches as clear_data_caches


# Process signals that change environment detection or config lookup. A
# developer shell inside WSL sets WSL_DISTRO_NAME; tests must not see it.
_LEAK_PRONE_ENV_KEYS = ("WSL_DISTRO_NAME", "FORKLAUNCH_REMOTE_NAME")


@pytest.fixture(autouse=True)
def _isolate_forklaunch_env(tmp_path_factory, monkeypatch):
    """Fresh caches, no FORKLAUNCH_* leakage, and a private user config dir."""
    for key in list(os.environ):
        if key.startswith("FORKLAUNCH_"):
            monkeypatch.delenv(key, raising=False)
    for key in _LEAK_PRONE_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    user_dir = tmp_path_factory.mktemp("user-config")
    monkeypatch.setenv("FORKLAUNCH_USER_CONFIG_DIR", str(user_dir))

    clear_all_caches()
    clear_data_caches()
    yield
    clear_all_caches()
    reset_stdlib_logging_for_tests()


@pytest.fixture
def user_config_dir() -> Path:
    """The user config directory the autouse fixture points forklaunch at."""
    return Path(os.environ["FORKLAUNCH_USER_CONFIG_DIR"])


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """
    Isolated project directory used as cwd and config project root.

    Creates ``.forklaunch/config`` so tests can drop project overrides in.
    """
    project = tmp_path / "project"
    (project / ".forklaunch" / "config").mkdir(parents=True)
    monkeypatch.chdir(project)
    return project
