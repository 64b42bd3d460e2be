"""
RESPONSIBILITIES
- Define shared interfaces and exceptions for file-backed session stores.
- Outline the workflow for load/save/list/healthcheck used by concrete stores.
PROCESS OVERVIEW
1. path_for -> sanitize the key and derive the backing file location.
2. load -> read the whole file, returning an empty payload when it is absent.
3. save -> replace the whole file atomically, never merging with prior content.
4. list_keys -> enumerate persisted keys for diagnostics.
5. healthcheck -> verify directory write access and that persisted files parse.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence


class StoreError(RuntimeError):
    """Base exception type for persistence-layer failures."""


class StoreValidationError(StoreError):
    """Raised when input data fails validation rules."""


class StoreReadError(StoreError):
    """Raised when a persisted file exists but cannot be read."""


class StoreCorruptError(StoreReadError):
    """Raised when a persisted file holds malformed content."""


class StoreWriteError(StoreError):
    """Raised when the store directory or a persisted file cannot be written."""


class SessionSaveError(StoreError):
    """Raised when the unit of work succeeded but persisting its cookies failed.

    ``result`` keeps the value returned by the unit of work so callers can tell
    a save failure apart from a work failure.
    """

    def __init__(self, message: str, *, domain: str, result: Any = None) -> None:
        super().__init__(message)
        self.domain = domain
        self.result = result


@dataclass(slots=True)
class PersistHealth:
    """Structured report produced by health checks."""

    writable_paths: dict[str, bool]
    corrupt_paths: list[str]
    issues: list[str] = field(default_factory=list)

    def is_healthy(self) -> bool:
        """Return True when no issues are observed."""

        return not self.issues and not self.corrupt_paths and all(self.writable_paths.values())


class BaseStore(ABC):
    """Abstract class shared by concrete JSON-backed stores."""

    suffix: str = ".json"

    def __init__(self, *, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def path_for(self, key: str) -> Path:
        """Return the backing file location for ``key``."""

    @abstractmethod
    def load(self, key: str) -> list[Any]:
        """Return the persisted payload, or an empty list when nothing is stored."""

    @abstractmethod
    def save(self, key: str, payload: Sequence[Any]) -> int:
        """Replace the persisted payload, returning the count of items written."""

    @abstractmethod
    def list_keys(self) -> list[str]:
        """Return the sanitized keys currently persisted."""

    @abstractmethod
    def healthcheck(self) -> PersistHealth:
        """Run diagnostics for the store and return a structured report."""
