from __future__ import annotations

from typing import Any, Protocol


class DatabaseFile(Protocol):
    """
    The on-disk copy of a whole database: collection name -> list of documents.
    """

    def load(self) -> dict[str, list[dict[str, Any]]] | None:
        """Return the stored database, or None when it could not be read."""
        ...

    def save(self, database: dict[str, list[dict[str, Any]]]) -> bool:
        """Overwrite the stored database. Returns False when nothing was written."""
        ...


class IntegrityCheck(Protocol):
    def __call__(self, database: dict[str, list[dict[str, Any]]]) -> Any:
        ...
