from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


def check_integrity(database: Any) -> list[str]:
    """
    Report structural problems in an in-memory database.

    Runs after every save. Problems are logged and returned; nothing is raised and
    nothing is repaired.
    """
    problems: list[str] = []
    if not isinstance(database, dict):
        problems.append(f"database is {type(database).__name__}, expected dict")
    else:
        for name, documents in database.items():
            if not isinstance(name, str):
                problems.append(f"collection name {name!r} is not a string")
            if not isinstance(documents, list):
                problems.append(f"collection {name!r} is {type(documents).__name__}, expected list")
                continue
            seen: set[str] = set()
            for position, document in enumerate(documents):
                where = f"{name}[{position}]"
                if not isinstance(document, dict):
                    problems.append(f"{where} is {type(document).__name__}, expected dict")
                    continue
                doc_id = document.get("id")
                if not isinstance(doc_id, str) or not doc_id:
                    problems.append(f"{where} has no string id")
                elif doc_id in seen:
                    problems.append(f"{where} duplicates id {doc_id!r}")
                else:
                    seen.add(doc_id)

    for problem in problems:
        logger.warning("INTEGRITY: %s", problem)
    return problems
