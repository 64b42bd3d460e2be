"""Playwright adapter for a shared remote browser.

The remote Chromium is reached over its WebSocket/CDP endpoint. It is shared
infrastructure: a connection only ever detaches from it by stopping the local
Playwright driver and never calls ``Browser.close()``, which would tear the
remote process down for every other caller.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    Error as PlaywrightError,
    sync_playwright,
)

from cookieflow.core.errors import BrowserConnectError, BrowserError
from cookieflow.core.logger import get_logger


DEFAULT_GOTO_TIMEOUT_MS = 30_000
DEFAULT_WAIT_UNTIL = "networkidle"


class RemoteConnection:
    """A live attachment to the remote browser exposing its active page."""

    def __init__(
        self,
        playwright: Playwright,
        browser: Browser,
        context: BrowserContext,
        page: Page,
    ) -> None:
        self.logger = get_logger()
        self._playwright: Playwright | None = playwright
        self.browser = browser
        self.context = context
        self.page = page

    @property
    def connected(self) -> bool:
        return self._playwright is not None

    # ------------------------------------------------------------------
    # Cookie round-trips
    def cookies(self) -> list[dict[str, Any]]:
        """Return every cookie of the active browser context."""

        try:
            return [dict(cookie) for cookie in self.context.cookies()]
        except PlaywrightError as exc:
            raise BrowserError(f"读取 cookies 失败: {exc}") from exc

    def set_cookies(self, cookies: Iterable[Mapping[str, Any]]) -> None:
        """Apply ``cookies`` to the active browser context."""

        payload = [dict(cookie) for cookie in cookies]
        if not payload:
            return
        try:
            self.context.add_cookies(payload)  # type: ignore[arg-type]
        except PlaywrightError as exc:
            raise BrowserError(f"写入 cookies 失败: {exc}") from exc

    # ------------------------------------------------------------------
    # Navigation
    def goto(
        self,
        url: str,
        *,
        wait_until: str = DEFAULT_WAIT_UNTIL,
        timeout_ms: int = DEFAULT_GOTO_TIMEOUT_MS,
    ) -> str:
        """Navigate the active page and return the URL it settled on."""

        self.logger.info("打开页面: %s", url)
        try:
            self.page.goto(url, wait_until=wait_until, timeout=timeout_ms)  # type: ignore[arg-type]
        except PlaywrightTimeoutError as exc:
            raise BrowserError(f"页面跳转超时: {url}") from exc
        except PlaywrightError as exc:
            raise BrowserError(f"页面跳转失败: {url}") from exc
        return self.page.url

    # ------------------------------------------------------------------
    # Release
    def disconnect(self) -> None:
        """Detach from the remote browser, leaving it running."""

        playwright = self._playwright
        if playwright is None:
            return
        self._playwright = None
        try:
            playwright.stop()
        except Exception as exc:  # noqa: BLE001
            raise BrowserError(f"断开远程浏览器失败: {exc}") from exc
        self.logger.info("Disconnected from browser")


class RemoteBrowser:
    """Connects to a remote Chromium over CDP and hands out connections."""

    def __init__(self, *, timeout_ms: int | None = None) -> None:
        self.logger = get_logger()
        self.timeout_ms = timeout_ms

    def connect(self, endpoint: str) -> RemoteConnection:
        """Attach to ``endpoint`` and select the first page of the first context.

        Raises:
            BrowserError: Playwright could not be started.
            BrowserConnectError: The endpoint refused or timed out.
        """

        try:
            playwright = sync_playwright().start()
        except Exception as exc:  # noqa: BLE001
            raise BrowserError("Playwright 未安装或初始化失败，请运行 pip install playwright") from exc

        try:
            if self.timeout_ms is None:
                browser = playwright.chromium.connect_over_cdp(endpoint)
            else:
                browser = playwright.chromium.connect_over_cdp(endpoint, timeout=self.timeout_ms)
            contexts = browser.contexts
            context = contexts[0] if contexts else browser.new_context()
            pages = context.pages
            page = pages[0] if pages else context.new_page()
        except PlaywrightError as exc:
            self._stop_quietly(playwright)
            self.logger.error("连接远程浏览器失败: %s", exc)
            raise BrowserConnectError(f"无法连接远程浏览器: {exc}") from exc

        self.logger.info("Connected to remote browser (%d contexts)", len(browser.contexts))
        return RemoteConnection(playwright, browser, context, page)

    def _stop_quietly(self, playwright: Playwright) -> None:
        try:
            playwright.stop()
        except Exception:  # noqa: BLE001
            self.logger.warning("停止 Playwright 失败", exc_info=True)
