"""
RESPONSIBILITIES
- Provide a persistence-local logger helper reusing the core logging setup.
PROCESS OVERVIEW
1. Callers request get_logger(name).
2. The core cookieflow logger is reused and a child logger is returned.
"""

from __future__ import annotations

import logging

from cookieflow.core.logger import get_logger as core_get_logger


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger for persistence modules."""

    return core_get_logger().getChild(name)
