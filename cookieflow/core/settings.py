from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from .errors import ConfigError


load_dotenv(override=False)

COOKIE_DIR_ENV = "COOKIE_DIR"
ENDPOINT_ENV = "BROWSER_WS_ENDPOINT"
CONNECT_TIMEOUT_ENV = "COOKIEFLOW_CONNECT_TIMEOUT_MS"
LOG_DIR_ENV = "COOKIEFLOW_LOG_DIR"

DEFAULT_COOKIE_DIR = Path("/data/workspace/cookies")


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment.

    Attributes:
        cookie_dir: Base directory holding one JSON file per domain.
        browser_ws_endpoint: WebSocket/CDP endpoint of the shared browser.
        connect_timeout_ms: Optional timeout handed to the connect call.
        log_dir: Directory receiving ``app.log``.
    """

    cookie_dir: Path
    browser_ws_endpoint: str | None
    connect_timeout_ms: int | None
    log_dir: Path

    def require_endpoint(self) -> str:
        if not self.browser_ws_endpoint:
            raise ConfigError(f"{ENDPOINT_ENV} not set and no endpoint provided")
        return self.browser_ws_endpoint


def _work_dir() -> Path:
    return Path.cwd() / ".cookieflow"


def _optional_int(env: Mapping[str, str], key: str) -> int | None:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``env`` (defaults to ``os.environ``)."""

    source = os.environ if env is None else env
    cookie_dir = source.get(COOKIE_DIR_ENV) or str(DEFAULT_COOKIE_DIR)
    endpoint = (source.get(ENDPOINT_ENV) or "").strip() or None
    log_dir = source.get(LOG_DIR_ENV)
    return Settings(
        cookie_dir=Path(cookie_dir).expanduser(),
        browser_ws_endpoint=endpoint,
        connect_timeout_ms=_optional_int(source, CONNECT_TIMEOUT_ENV),
        log_dir=Path(log_dir).expanduser() if log_dir else _work_dir() / "logs",
    )
