from __future__ import annotations

import copy
import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Mapping

from .backup import BackupScheduler, parse_backup_interval
from .disk_store import DiskJsonDatabaseFile
from .events import DOCUMENT_DELETED, DOCUMENT_INSERTED, DOCUMENT_UPDATED, EventBus, Listener
from .indexes import CollectionIndex
from .integrity import check_integrity
from .interfaces import IntegrityCheck
from .models import Database, Document, StoreOptions, matches_filter, values_equal

logger = logging.getLogger(__name__)


def generate_unique_id() -> str:
    return str(uuid.uuid4())


def _require_mapping(value: Any, name: str) -> None:
    if not isinstance(value, Mapping):
        raise TypeError(f"{name} must be a dict")


def _first_match(documents: list[Document], filter: Mapping[str, Any]) -> int | None:
    for position, document in enumerate(documents):
        if matches_filter(document, filter):
            return position
    return None


class DocumentStore:
    """
    In-memory collections of JSON documents backed by a single JSON file.

    Every mutation runs in this order: change the data, update the indexes, emit the
    event, save the file, run the integrity check. A listener that raises aborts the
    rest of that sequence, so the change stays in memory but is not saved.

    All public operations hold one re-entrant lock, which the backup thread also takes
    while copying the data. Listeners run while the lock is held and may call back
    into the store.
    """

    def __init__(
        self,
        database_file_path: str | Path,
        options: StoreOptions | None = None,
        *,
        integrity_check: IntegrityCheck | None = check_integrity,
    ):
        self.options = options if options is not None else StoreOptions()

        # Raises BackupIntervalError before anything touches disk.
        interval = parse_backup_interval(self.options.backup_interval) if self.options.backup_enabled else None

        self.database_file_path = Path(database_file_path)
        self._file = DiskJsonDatabaseFile(self.database_file_path, save_enabled=self.options.save_to_file)
        self._integrity_check = integrity_check
        self._lock = threading.RLock()
        self._database: Database = {}
        self._indexes: dict[str, CollectionIndex] = {}
        self._events = EventBus()

        self.load_from_file()

        self._backup: BackupScheduler | None = None
        if interval is not None:
            self._backup = BackupScheduler(self.snapshot, self.options.backup_path, interval)
            self._backup.start()

    def __enter__(self) -> "DocumentStore":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def backup_scheduler(self) -> BackupScheduler | None:
        return self._backup

    def close(self) -> None:
        """Stop the backup schedule. The in-memory data stays usable."""
        if self._backup is not None:
            self._backup.stop()

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def load_from_file(self) -> None:
        loaded = self._file.load()
        if loaded is None:
            # unreadable file: keep whatever is already in memory
            return
        with self._lock:
            self._database = loaded
            self.build_indexes()

    def save_changes(self) -> None:
        with self._lock:
            self._file.save(self._database)
            if self._integrity_check is not None:
                self._integrity_check(self._database)

    def snapshot(self) -> Database:
        with self._lock:
            return copy.deepcopy(self._database)

    # -------------------------------------------------------------------
    # Indexes
    # -------------------------------------------------------------------
    def build_indexes(self) -> None:
        with self._lock:
            indexes: dict[str, CollectionIndex] = {}
            for name, documents in self._database.items():
                index = CollectionIndex()
                for document in documents:
                    index.add(document)
                indexes[name] = index
            self._indexes = indexes

    def _ensure_collection(self, name: str) -> bool:
        if name in self._database:
            return False
        self._database[name] = []
        self._indexes[name] = CollectionIndex()
        logger.debug("STORE: created collection %s", name)
        return True

    # -------------------------------------------------------------------
    # Collections & documents
    # -------------------------------------------------------------------
    def collection_names(self) -> list[str]:
        with self._lock:
            return list(self._database)

    def create_collection(self, name: str) -> None:
        with self._lock:
            if self._ensure_collection(name):
                self.save_changes()

    def insert_document(self, collection: str, document: Document) -> Document:
        """
        Append `document` (the same dict object) to `collection`, creating the
        collection if needed. A missing or empty "id" is replaced by a new UUID.
        Duplicate ids are not checked.
        """
        if not isinstance(document, dict):
            raise TypeError("document must be a dict")
        with self._lock:
            if not document.get("id"):
                document["id"] = generate_unique_id()
            self._ensure_collection(collection)
            self._database[collection].append(document)
            self._indexes[collection].add(document)
            self._events.emit(DOCUMENT_INSERTED, {"collection": collection, "document": document})
            self.save_changes()
            return document

    def find_documents(self, collection: str, filter: Mapping[str, Any] | None = None) -> list[Document]:
        """
        Documents of `collection` whose fields equal every filter value, in insertion order.

        With no filter the live document list is returned, not a copy.
        Filter fields that no document has ever held are ignored.
        """
        if filter is not None:
            _require_mapping(filter, "filter")
        with self._lock:
            documents = self._database.get(collection)
            if documents is None:
                return []
            index = self._indexes[collection]
            result = documents
            for field, value in (filter or {}).items():
                if not index.has_field(field):
                    continue
                if not index.contains(field, value):
                    return []
                result = [d for d in result if field in d and values_equal(d[field], value)]
            return result

    def update_document(
        self, collection: str, filter: Mapping[str, Any], patch: Mapping[str, Any]
    ) -> Document | None:
        """
        Merge `patch` into the first document matching `filter`.

        The matched document is replaced by a new dict at the same position. Index
        entries for values the patch overwrote are left behind. Returns None, with no
        side effects, when nothing matches.
        """
        _require_mapping(filter, "filter")
        _require_mapping(patch, "patch")
        with self._lock:
            documents = self._database.get(collection)
            if documents is None:
                return None
            position = _first_match(documents, filter)
            if position is None:
                return None
            updated = {**documents[position], **patch}
            documents[position] = updated
            self._indexes[collection].add(updated)
            self._events.emit(DOCUMENT_UPDATED, {"collection": collection, "filter": filter, "patch": patch})
            self.save_changes()
            return updated

    def delete_document(self, collection: str, filter: Mapping[str, Any]) -> Document | None:
        _require_mapping(filter, "filter")
        with self._lock:
            documents = self._database.get(collection)
            if documents is None:
                return None
            position = _first_match(documents, filter)
            if position is None:
                return None
            deleted = documents.pop(position)
            self._indexes[collection].discard(deleted)
            self._events.emit(DOCUMENT_DELETED, {"collection": collection, "filter": filter})
            self.save_changes()
            return deleted

    # -------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------
    def on(self, event: str, listener: Listener) -> None:
        with self._lock:
            self._events.on(event, listener)
