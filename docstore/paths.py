from __future__ import annotations

from pathlib import Path


def project_root() -> Path:
    # docstore/paths.py -> docstore -> project root
    return Path(__file__).resolve().parents[1]


def default_database_file() -> Path:
    return project_root() / "data" / "database.json"


def default_backup_dir() -> Path:
    return project_root() / "backups"
