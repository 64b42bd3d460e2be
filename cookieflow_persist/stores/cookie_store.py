"""
RESPONSIBILITIES
- Manage the JSON-backed store mapping a domain key to its saved cookies.
- Handle cold starts, whole-file overwrites, listing and health diagnostics.
PROCESS OVERVIEW
1. load_cookies() returns [] for a domain that was never saved.
2. save_cookies() writes <COOKIE_DIR>/<sanitized-domain>.json atomically.
3. list_domains() enumerates the saved domains for the CLI.
4. healthcheck() verifies the root is writable and every file parses.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Sequence

from cookieflow_persist.stores.base_store import (
    BaseStore,
    PersistHealth,
    StoreCorruptError,
    StoreError,
    StoreValidationError,
    StoreWriteError,
)
from cookieflow_persist.utils.json_io import read_json_array, write_json_array
from cookieflow_persist.utils.log import get_logger
from cookieflow_persist.utils.paths import ensure_root, resolve_root, session_file_path

DEFAULT_DOMAIN = "all"

CookieRecord = Mapping[str, Any]


class CookieStore(BaseStore):
    """Concrete store persisting one cookie list per domain key."""

    def __init__(self, root: Path | str | None = None, *, logger: logging.Logger | None = None) -> None:
        super().__init__(logger=logger or get_logger("cookie_store"))
        self.root = resolve_root(root)

    # BaseStore API -----------------------------------------------------------------

    def path_for(self, key: str) -> Path:
        if not isinstance(key, str) or not key:
            raise StoreValidationError("Domain key must be a non-empty string")
        return session_file_path(key, self.root, suffix=self.suffix)

    def load(self, key: str = DEFAULT_DOMAIN) -> list[Any]:
        path = self.path_for(key)
        cookies = self._read_session(path)
        if cookies is None:
            self.logger.info("No saved cookies for %s", key)
            return []
        self.logger.info("Loaded %d cookies for %s", len(cookies), key)
        return cookies

    def save(self, key: str, payload: Sequence[Any]) -> int:
        path = self.path_for(key)
        try:
            ensure_root(self.root)
        except OSError as exc:
            raise StoreWriteError(f"Cannot create cookie directory {self.root}: {exc}") from exc
        write_json_array(path, payload)
        count = len(payload)
        self.logger.info("Saved %d cookies to %s", count, path)
        return count

    def list_keys(self) -> list[str]:
        if not self.root.is_dir():
            return []
        return sorted(p.stem for p in self.root.glob(f"*{self.suffix}") if p.is_file())

    def healthcheck(self) -> PersistHealth:
        issues: list[str] = []
        writable_paths: dict[str, bool] = {}
        corrupt: list[str] = []

        try:
            ensure_root(self.root)
        except OSError as exc:
            issues.append(f"Failed to ensure cookie directory: {exc}")
            return PersistHealth(writable_paths={str(self.root): False}, corrupt_paths=corrupt, issues=issues)

        writable_paths[str(self.root)] = os.access(self.root, os.W_OK | os.X_OK)
        for key in self.list_keys():
            path = self.root / f"{key}{self.suffix}"
            try:
                self._read_session(path)
            except StoreError as exc:
                corrupt.append(str(path))
                issues.append(str(exc))

        return PersistHealth(writable_paths=writable_paths, corrupt_paths=corrupt, issues=issues)

    def list_domains(self) -> list[str]:
        return self.list_keys()

    @staticmethod
    def _read_session(path: Path) -> list[Any] | None:
        cookies = read_json_array(path)
        if cookies is None:
            return None
        for idx, cookie in enumerate(cookies):
            if not isinstance(cookie, dict):
                raise StoreCorruptError(
                    f"Expected a cookie object at index {idx} in {path}, found {type(cookie).__name__}"
                )
        return cookies


def load_cookies(domain: str = DEFAULT_DOMAIN, *, root: Path | None = None) -> list[Any]:
    """Return the cookies saved for ``domain`` (empty when never saved)."""

    return CookieStore(root).load(domain)


def save_cookies(domain: str, cookies: Sequence[CookieRecord], *, root: Path | None = None) -> int:
    """Replace the cookies saved for ``domain``."""

    return CookieStore(root).save(domain, cookies)


def list_domains(*, root: Path | None = None) -> list[str]:
    return CookieStore(root).list_domains()


def cookie_healthcheck(root: Path | None = None) -> PersistHealth:
    return CookieStore(root).healthcheck()
