from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import docstore...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


from docstore import DocumentStore, StoreOptions  # noqa: E402


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "database.json"


@pytest.fixture
def store_options(tmp_path: Path) -> StoreOptions:
    """
    Options for tests: file persistence on, backups off, everything under tmp_path.
    """
    return StoreOptions(
        backup_enabled=False,
        backup_interval="1d",
        backup_path=tmp_path / "backups",
        save_to_file=True,
    )


@pytest.fixture
def store(db_path: Path, store_options: StoreOptions):
    st = DocumentStore(db_path, store_options)
    yield st
    st.close()
