"""Custom exceptions used across cookieflow."""


class CookieFlowError(Exception):
    """Base error for the application."""


class ConfigError(CookieFlowError):
    """Configuration related error."""


class BrowserError(CookieFlowError):
    """Raised when browser automation fails."""


class BrowserConnectError(BrowserError):
    """Raised when the remote browser endpoint cannot be reached."""
