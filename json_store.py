from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_json(path: Path) -> Any | None:
    """
    Read JSON from disk.

    Returns None for missing files. Read and parse errors propagate so callers
    can decide how to report them.
    """
    if not path.exists():
        return None
    raw = path.read_text(encoding="utf-8")
    return json.loads(raw)


def write_json(path: Path, payload: Any, *, indent: int = 2) -> None:
    """
    Overwrite `path` with pretty-printed JSON in a single write.

    There is no temp-file/rename step: a crash mid-write can leave a truncated file.
    """
    text = json.dumps(payload, indent=indent, ensure_ascii=False)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
