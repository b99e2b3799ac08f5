"""
Per-collection field indexes.

Each field maps a value to the document that most recently held it. Two documents
sharing a value keep only the later one, so an index answers "does any indexed
document hold this value?" and nothing more. Filtering always re-scans the
collection.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any

from .models import Document, value_key


class CollectionIndex:
    def __init__(self) -> None:
        # field -> value key -> document
        self._fields: dict[str, dict[Hashable, Document]] = {}

    def add(self, document: Document) -> None:
        for field, value in document.items():
            self._fields.setdefault(field, {})[value_key(value)] = document

    def discard(self, document: Document) -> None:
        """Drop entries that still point at `document`; entries taken over by later writes stay."""
        for field, value in document.items():
            entries = self._fields.get(field)
            if entries is None:
                continue
            key = value_key(value)
            if entries.get(key) is document:
                del entries[key]

    def has_field(self, field: str) -> bool:
        return field in self._fields

    def contains(self, field: str, value: Any) -> bool:
        entries = self._fields.get(field)
        return entries is not None and value_key(value) in entries
