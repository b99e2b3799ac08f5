from __future__ import annotations

from collections.abc import Hashable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, JsonValue, RootModel

from .paths import default_backup_dir

Document = dict[str, Any]
Database = dict[str, list[Document]]


class StoreOptions(BaseModel):
    backup_enabled: bool = True
    # "<int><s|m|h|d>", parsed when the store is constructed
    backup_interval: str = "1d"
    backup_path: Path = Field(default_factory=default_backup_dir)
    save_to_file: bool = True


class DatabaseDoc(RootModel[dict[str, list[dict[str, JsonValue]]]]):
    """
    Mirrors the on-disk database file:
      { "<collection>": [ { "id": "...", ... }, ... ] }
    """

    @classmethod
    def from_disk_doc(cls, doc: Any) -> "DatabaseDoc":
        return cls.model_validate(doc)

    def to_database(self) -> Database:
        return self.root


def values_equal(a: Any, b: Any) -> bool:
    """
    Strict equality for document values: types must agree as well as values.

    Numbers compare by value (1 == 1.0) but booleans never equal numbers.
    Mappings and sequences compare element-wise with the same rule.
    """
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        return a.keys() == b.keys() and all(values_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    return type(a) is type(b) and a == b


def value_key(value: Any) -> Hashable:
    """Hashable key for `value`; two keys are equal exactly when `values_equal` holds."""
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, (int, float)):
        return ("num", value)
    if value is None:
        return ("null",)
    if isinstance(value, str):
        return ("str", value)
    if isinstance(value, Mapping):
        return ("map", frozenset((k, value_key(v)) for k, v in value.items()))
    if isinstance(value, (list, tuple)):
        return ("seq", tuple(value_key(v) for v in value))
    try:
        hash(value)
    except TypeError:
        # non-JSON container: match by identity only
        return (type(value).__name__, id(value))
    return (type(value).__name__, value)


def matches_filter(document: Mapping[str, Any], filter: Mapping[str, Any]) -> bool:
    # a field missing from the document never matches
    return all(k in document and values_equal(document[k], v) for k, v in filter.items())
