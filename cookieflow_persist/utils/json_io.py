"""
RESPONSIBILITIES
- Manage whole-file read/write operations for JSON array payloads.
- Keep writes atomic with respect to a single writer via a temporary file swap.
PROCESS OVERVIEW
1. read_json_array() loads the file and insists on a top-level list.
2. write_json_array() serializes with a 2-space indent into a .tmp sibling.
3. The sibling replaces the target in one os.replace() call.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Sequence

from cookieflow_persist.stores.base_store import StoreCorruptError, StoreReadError, StoreWriteError


def _tmp_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def read_json_array(path: Path) -> list[Any] | None:
    """Return the list stored at ``path``, or None when the file is absent."""

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        raise StoreReadError(f"Cannot read {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StoreCorruptError(f"Malformed JSON in {path}: {exc}") from exc
    if not isinstance(data, list):
        raise StoreCorruptError(f"Expected a JSON array in {path}, found {type(data).__name__}")
    return data


def write_json_array(path: Path, payload: Sequence[Any]) -> None:
    """Write ``payload`` to ``path`` replacing any previous content."""

    tmp_path = _tmp_path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(list(payload), indent=2, ensure_ascii=False)
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, path)
    except (OSError, TypeError, ValueError) as exc:
        if tmp_path.exists():
            tmp_path.unlink()
        raise StoreWriteError(f"Cannot write {path}: {exc}") from exc
