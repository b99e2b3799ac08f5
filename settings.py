from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from docstore.models import StoreOptions
from docstore.paths import default_backup_dir, default_database_file


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Primary data file
    database_file: Path

    # Persistence
    save_to_file: bool

    # Backups
    backup_enabled: bool
    backup_interval: str
    backup_path: Path

    # Logging
    log_level: str

    def store_options(self) -> StoreOptions:
        return StoreOptions(
            backup_enabled=self.backup_enabled,
            backup_interval=self.backup_interval,
            backup_path=self.backup_path,
            save_to_file=self.save_to_file,
        )


def get_settings() -> Settings:
    database_file = Path(os.getenv("DATABASE_FILE") or default_database_file())
    backup_path = Path(os.getenv("BACKUP_PATH") or default_backup_dir())

    # Validated when the store is constructed, not here.
    backup_interval = os.getenv("BACKUP_INTERVAL", "1d").strip()

    return Settings(
        database_file=database_file,
        save_to_file=_env_bool("SAVE_TO_FILE", True),
        backup_enabled=_env_bool("BACKUP_ENABLED", True),
        backup_interval=backup_interval,
        backup_path=backup_path,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
