"""
Persistence facade exposing the JSON-backed cookie store.
"""

from .stores.base_store import (
    PersistHealth,
    SessionSaveError,
    StoreCorruptError,
    StoreError,
    StoreReadError,
    StoreValidationError,
    StoreWriteError,
)
from .stores.cookie_store import (
    DEFAULT_DOMAIN,
    CookieStore,
    cookie_healthcheck,
    list_domains,
    load_cookies,
    save_cookies,
)

__all__ = [
    "CookieStore",
    "DEFAULT_DOMAIN",
    "PersistHealth",
    "SessionSaveError",
    "StoreCorruptError",
    "StoreError",
    "StoreReadError",
    "StoreValidationError",
    "StoreWriteError",
    "cookie_healthcheck",
    "list_domains",
    "load_cookies",
    "save_cookies",
]
