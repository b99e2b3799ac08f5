from __future__ import annotations

import logging
import threading
from pathlib import Path

from json_store import read_json, write_json

from .interfaces import DatabaseFile
from .models import Database, DatabaseDoc

logger = logging.getLogger(__name__)


class DiskJsonDatabaseFile(DatabaseFile):
    """
    Stores a whole database as one pretty-printed JSON document at a fixed path.

    - `load` never raises: read/parse failures are logged and reported as None.
    - `save` overwrites the file in place (no temp file, no rename) and never raises.
    - With `save_enabled=False`, `save` is a no-op.
    """

    def __init__(self, path: Path, *, save_enabled: bool = True):
        self._lock = threading.Lock()
        self._path = Path(path)
        self._save_enabled = save_enabled

    def load(self) -> Database | None:
        if not self._path.exists():
            logger.info("DATABASE LOAD: %s not found, creating a new database", self._path)
            database: Database = {}
            self.save(database)
            return database

        try:
            with self._lock:
                raw = read_json(self._path)
            doc = DatabaseDoc.from_disk_doc(raw)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            logger.error("DATABASE LOAD: failed to load %s: %r", self._path, e)
            return None

        logger.info("DATABASE LOAD: loaded %s", self._path)
        return doc.to_database()

    def save(self, database: Database) -> bool:
        if not self._save_enabled:
            return False
        try:
            with self._lock:
                write_json(self._path, database)
        except (OSError, TypeError, ValueError) as e:
            logger.error("DATABASE SAVE: failed to write %s: %r", self._path, e)
            return False
        logger.info("DATABASE SAVE: wrote %s", self._path)
        return True
