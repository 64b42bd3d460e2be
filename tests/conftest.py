from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import cookieflow.core.logger as core_logger
from cookieflow.core.settings import Settings


@pytest.fixture(autouse=True)
def _isolated_logging(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep app.log out of the workspace and drop handlers bound to captured streams."""

    monkeypatch.setenv("COOKIEFLOW_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(core_logger, "_LOGGER", None, raising=False)
    yield
    logger = logging.getLogger("cookieflow")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    core_logger._LOGGER = None


@pytest.fixture
def cookie_dir(tmp_path: Path) -> Path:
    return tmp_path / "cookies"


@pytest.fixture
def settings(cookie_dir: Path, tmp_path: Path) -> Settings:
    return Settings(
        cookie_dir=cookie_dir,
        browser_ws_endpoint="ws://browser.test:3000/devtools/browser/abc",
        connect_timeout_ms=None,
        log_dir=tmp_path / "logs",
    )
