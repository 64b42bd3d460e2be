"""Read-only login probes over the outcome of a navigation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Union

from browser.remote_flow import RemoteConnection
from cookieflow.core.logger import get_logger


@dataclass(frozen=True)
class UrlContainsRule:
    """Logged in when every ``includes`` token is in the URL and no ``excludes`` token is."""

    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()

    def evaluate(self, page: Any, url: str) -> bool:
        return all(token in url for token in self.includes) and not any(
            token in url for token in self.excludes
        )


@dataclass(frozen=True)
class CustomPredicate:
    """Caller-supplied classifier receiving ``(page, url)``."""

    fn: Callable[[Any, str], bool] = field(compare=False)

    def evaluate(self, page: Any, url: str) -> bool:
        return bool(self.fn(page, url))


LoginIndicator = Union[UrlContainsRule, CustomPredicate]

DEFAULT_INDICATOR = UrlContainsRule(excludes=("login", "signin"))


def is_logged_in(
    connection: RemoteConnection,
    probe_url: str,
    indicator: LoginIndicator = DEFAULT_INDICATOR,
) -> bool:
    """Navigate to ``probe_url`` and classify where the browser ended up.

    Takes the connection rather than the bare page so navigation goes through
    ``RemoteConnection.goto``, which applies the wait policy and timeout and
    wraps Playwright failures in ``BrowserError``. Custom predicates still
    receive ``connection.page``.
    """

    current_url = connection.goto(probe_url)
    logged_in = indicator.evaluate(connection.page, current_url)
    get_logger().info("登录检测 %s -> %s (%s)", probe_url, current_url, "ok" if logged_in else "未登录")
    return logged_in
