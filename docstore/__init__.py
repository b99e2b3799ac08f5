from __future__ import annotations

from .backup import BackupIntervalError, BackupScheduler, parse_backup_interval
from .document_store import DocumentStore
from .events import DOCUMENT_DELETED, DOCUMENT_INSERTED, DOCUMENT_UPDATED, EventBus
from .models import StoreOptions
from .repositories import AsyncDiskDocumentRepository, AsyncDocumentRepository

__all__ = [
    "DocumentStore",
    "StoreOptions",
    "EventBus",
    "DOCUMENT_INSERTED",
    "DOCUMENT_UPDATED",
    "DOCUMENT_DELETED",
    "BackupScheduler",
    "BackupIntervalError",
    "parse_backup_interval",
    "AsyncDocumentRepository",
    "AsyncDiskDocumentRepository",
]
