from __future__ import annotations

import asyncio
from typing import Any, Mapping, Protocol

from .document_store import DocumentStore
from .models import Document


class AsyncDocumentRepository(Protocol):
    async def create_collection(self, collection: str) -> None: ...

    async def insert(self, collection: str, document: Document) -> Document: ...
    async def find(self, collection: str, filter: Mapping[str, Any] | None = None) -> list[Document]: ...
    async def update(
        self, collection: str, filter: Mapping[str, Any], patch: Mapping[str, Any]
    ) -> Document | None: ...
    async def delete(self, collection: str, filter: Mapping[str, Any]) -> Document | None: ...


class AsyncDiskDocumentRepository(AsyncDocumentRepository):
    """
    Async wrapper around a DocumentStore.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    @property
    def store(self) -> DocumentStore:
        return self._store

    async def create_collection(self, collection: str) -> None:
        await asyncio.to_thread(self._store.create_collection, collection)

    async def insert(self, collection: str, document: Document) -> Document:
        return await asyncio.to_thread(self._store.insert_document, collection, document)

    async def find(self, collection: str, filter: Mapping[str, Any] | None = None) -> list[Document]:
        # copy: the unfiltered result is the store's live list
        docs = await asyncio.to_thread(self._store.find_documents, collection, filter)
        return list(docs)

    async def update(
        self, collection: str, filter: Mapping[str, Any], patch: Mapping[str, Any]
    ) -> Document | None:
        return await asyncio.to_thread(self._store.update_document, collection, filter, patch)

    async def delete(self, collection: str, filter: Mapping[str, Any]) -> Document | None:
        return await asyncio.to_thread(self._store.delete_document, collection, filter)
