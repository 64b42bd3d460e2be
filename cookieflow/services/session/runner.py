"""Cookie-backed session lifecycle around a caller's unit of work.

Every run walks ``connect -> (load) -> work -> (save) -> disconnect``.
Disconnect happens on every exit path and exactly once. Cookies are only
saved when the work returned normally, so a half-finished login never
overwrites a good session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol, TypeVar

from browser.remote_flow import RemoteBrowser, RemoteConnection
from cookieflow.config import SiteConfigError, SiteProbe, load_site_probes
from cookieflow.core.errors import BrowserError
from cookieflow.core.logger import get_logger
from cookieflow.core.settings import Settings, load_settings
from cookieflow.services.session.login import is_logged_in
from cookieflow_persist.stores.base_store import SessionSaveError, StoreError
from cookieflow_persist.stores.cookie_store import DEFAULT_DOMAIN, CookieStore

T = TypeVar("T")

UnitOfWork = Callable[[Any, RemoteConnection], T]


class Connector(Protocol):
    def connect(self, endpoint: str) -> RemoteConnection:
        ...


@dataclass(frozen=True)
class SessionOptions:
    """Per-run switches.

    Attributes:
        auto_load: Apply saved cookies before the work runs.
        auto_save: Persist the page cookies after the work succeeds.
        endpoint: Overrides ``BROWSER_WS_ENDPOINT`` for this run.
        connect_timeout_ms: Overrides the configured connect timeout.
    """

    auto_load: bool = True
    auto_save: bool = True
    endpoint: str | None = None
    connect_timeout_ms: int | None = None


class SessionRunner:
    """Runs units of work against the remote browser with persisted cookies."""

    def __init__(
        self,
        *,
        store: CookieStore | None = None,
        connector: Connector | None = None,
        settings: Settings | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.logger = logger or get_logger(self.settings.log_dir)
        self.store = store or CookieStore(self.settings.cookie_dir)
        self.connector = connector

    def run(
        self,
        domain: str,
        work: UnitOfWork[T],
        options: SessionOptions | None = None,
    ) -> T:
        """Run ``work(page, connection)`` inside a cookie-backed session.

        Raises:
            ConfigError: No endpoint is configured; raised before connecting.
            BrowserConnectError: The remote browser could not be reached.
            SessionSaveError: The work succeeded but its cookies were not saved.
        """

        opts = options or SessionOptions()
        endpoint = opts.endpoint or self.settings.require_endpoint()
        connection = self._connector(opts).connect(endpoint)

        failed = False
        try:
            if opts.auto_load:
                cookies = self.store.load(domain)
                if cookies:
                    connection.set_cookies(cookies)
            result = work(connection.page, connection)
            if opts.auto_save:
                self._save(domain, connection, result)
            return result
        except BaseException:
            failed = True
            raise
        finally:
            self._release(connection, suppress_errors=failed)

    def check_site(self, name: str, *, sites: dict[str, SiteProbe] | None = None) -> bool:
        """Probe a configured site with its saved cookies, without saving."""

        probes = sites if sites is not None else load_site_probes()
        probe = probes.get(name)
        if probe is None:
            raise SiteConfigError(f"未配置站点: {name}")
        indicator = probe.indicator()
        return self.run(
            probe.domain,
            lambda _page, connection: is_logged_in(connection, probe.probe_url, indicator),
            SessionOptions(auto_save=False),
        )

    def _connector(self, opts: SessionOptions) -> Connector:
        if self.connector is not None:
            return self.connector
        timeout = opts.connect_timeout_ms or self.settings.connect_timeout_ms
        return RemoteBrowser(timeout_ms=timeout)

    def _save(self, domain: str, connection: RemoteConnection, result: Any) -> None:
        try:
            self.store.save(domain, connection.cookies())
        except (StoreError, BrowserError) as exc:
            self.logger.error("保存 cookies 失败 (%s): %s", domain, exc)
            raise SessionSaveError(
                f"Work finished but cookies for {domain} were not saved: {exc}",
                domain=domain,
                result=result,
            ) from exc

    def _release(self, connection: RemoteConnection, *, suppress_errors: bool) -> None:
        try:
            connection.disconnect()
        except Exception:
            if not suppress_errors:
                raise
            self.logger.warning("断开连接失败，保留原始异常", exc_info=True)


def with_session(
    domain: str,
    work: UnitOfWork[T],
    options: SessionOptions | None = None,
    *,
    store: CookieStore | None = None,
    connector: Connector | None = None,
    settings: Settings | None = None,
) -> T:
    """Convenience wrapper building a one-off :class:`SessionRunner`."""

    runner = SessionRunner(store=store, connector=connector, settings=settings)
    return runner.run(domain or DEFAULT_DOMAIN, work, options)
