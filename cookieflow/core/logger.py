from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import os
import sys
from .settings import LOG_DIR_ENV, _work_dir


_LOGGER: logging.Logger | None = None


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return the configured application logger writing to <log dir>/app.log.

    The directory comes from ``log_dir``, then ``COOKIEFLOW_LOG_DIR``, then
    ``./.cookieflow/logs``. Creates the directory if needed.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    if log_dir is not None:
        base = Path(log_dir)
    elif os.getenv(LOG_DIR_ENV):
        base = Path(os.environ[LOG_DIR_ENV]).expanduser()
    else:
        base = _work_dir() / "logs"
    base.mkdir(parents=True, exist_ok=True)
    log_path = base / "app.log"

    logger = logging.getLogger("cookieflow")
    logger.setLevel(logging.INFO)
    logger.propagate = False

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(fmt)
    logger.addHandler(file_handler)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(fmt)
    logger.addHandler(console)

    _LOGGER = logger
    return logger
