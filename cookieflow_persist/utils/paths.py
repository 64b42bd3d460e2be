"""
RESPONSIBILITIES
- Resolve the storage root used for persisted cookie sessions.
- Turn arbitrary domain keys into filesystem-safe file names.
PROCESS OVERVIEW
1. resolve_root() expands user input or falls back to the configured COOKIE_DIR.
2. ensure_root() materializes the directory when a write needs it.
3. session_file_path() returns the canonical file location for a domain key.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from cookieflow.core.settings import load_settings

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9.-]")


def resolve_root(root: str | os.PathLike[str] | None = None) -> Path:
    """Return the storage root, defaulting to the COOKIE_DIR setting."""

    if root is None:
        base = load_settings().cookie_dir
    else:
        base = Path(root)
    return base.expanduser().resolve()


def ensure_root(root: str | os.PathLike[str] | None = None) -> Path:
    """Ensure the storage root exists and return it."""

    base = resolve_root(root)
    base.mkdir(parents=True, exist_ok=True)
    return base


def sanitize_key(key: str) -> str:
    """Replace every character outside ``[A-Za-z0-9.-]`` with ``_``.

    Distinct keys may map to the same token (``a/b.com`` and ``a_b.com``).
    """

    return _UNSAFE_CHARS.sub("_", key)


def session_file_path(key: str, root: str | os.PathLike[str] | None = None, *, suffix: str = ".json") -> Path:
    """Return the absolute file location for ``key`` under the storage root."""

    return resolve_root(root) / f"{sanitize_key(key)}{suffix}"
