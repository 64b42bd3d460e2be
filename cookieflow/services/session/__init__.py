"""Cookie-backed browser sessions."""

from .login import CustomPredicate, DEFAULT_INDICATOR, LoginIndicator, UrlContainsRule, is_logged_in
from .runner import SessionOptions, SessionRunner, with_session


__all__ = [
    "CustomPredicate",
    "DEFAULT_INDICATOR",
    "LoginIndicator",
    "SessionOptions",
    "SessionRunner",
    "UrlContainsRule",
    "is_logged_in",
    "with_session",
]
