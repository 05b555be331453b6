from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from adcrawl.exceptions import NavigationFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaywrightBrowserOptions:
    headless: bool = True
    executable_path: Optional[str] = None
    user_agent: Optional[str] = None
    timeout_ms: int = 0  # 0 disables Playwright's navigation timeout
    wait_until: str = "load"  # domcontentloaded | load | networkidle | commit


class BrowserPage:
    """One isolated tab owned by a single crawl.

    Playwright errors never escape: they surface as `NavigationFailure`
    naming the URL involved.
    """

    def __init__(self, page, options: PlaywrightBrowserOptions, url: str = "about:blank"):
        self._page = page
        self._options = options
        # last URL a navigation was requested for; failures name it even after redirects
        self._requested_url = url

    @property
    def url(self) -> str:
        return self._requested_url

    @property
    def current_url(self) -> str:
        return self._page.url

    async def navigate(self, url: str) -> None:
        self._requested_url = url
        try:
            resp = await self._page.goto(url, wait_until=self._options.wait_until, timeout=self._options.timeout_ms)
        except PlaywrightError as e:
            raise NavigationFailure(url, e) from e
        status = resp.status if resp is not None else None
        if status is not None and (status < 200 or status >= 400):
            logger.warning("Non-success status for %s: %s", url, status)

    async def content(self) -> str:
        try:
            return await self._page.content()
        except PlaywrightError as e:
            raise NavigationFailure(self._requested_url, e) from e

    async def close(self) -> None:
        url = self._requested_url
        try:
            # Pages opened via browser.new_page() own their context; closing
            # the page releases it too.
            await self._page.close()
        except PlaywrightError as e:
            raise NavigationFailure(url, e) from e


class BrowserSession:
    """Process-wide Chromium connection shared by every crawl.

    Constructed once (a DI singleton), started before the first request is
    served and stopped once at shutdown. Crawls never own the session; each
    one borrows an isolated page via `acquire_page()`.

    Playwright's dispatcher drains the browser protocol on the event loop.
    A watcher task runs for the session's lifetime and records connection
    loss; a lost connection is fatal for every current and future crawl
    and is never re-established.
    """

    def __init__(
        self,
        *,
        options: Optional[PlaywrightBrowserOptions] = None,
        playwright_factory: Optional[Callable[[], object]] = None,
    ):
        self._options = options or PlaywrightBrowserOptions()
        self._playwright_factory = playwright_factory or async_playwright
        self._playwright = None
        self._browser = None
        self._watcher: Optional[asyncio.Task] = None
        self._disconnected: Optional[asyncio.Event] = None
        self._stopping = False
        self._connection_lost = False

    @property
    def options(self) -> PlaywrightBrowserOptions:
        return self._options

    @property
    def started(self) -> bool:
        return self._browser is not None

    @property
    def is_alive(self) -> bool:
        return self.started and not self._connection_lost and not self._stopping

    async def start(self) -> None:
        if self._browser is not None:
            raise RuntimeError("browser session already started")
        self._stopping = False
        self._connection_lost = False
        self._disconnected = asyncio.Event()

        self._playwright = await self._playwright_factory().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self._options.headless,
                executable_path=self._options.executable_path,
            )
        except Exception:
            logger.error("Error launching browser", exc_info=True)
            await self._playwright.stop()
            self._playwright = None
            raise

        self._browser.on("disconnected", self._on_disconnected)
        self._watcher = asyncio.create_task(self._watch_connection(), name="browser-connection-watcher")
        logger.info("Browser session started (headless=%s)", self._options.headless)

    def _on_disconnected(self, *_args) -> None:
        self._disconnected.set()

    async def _watch_connection(self) -> None:
        await self._disconnected.wait()
        if self._stopping:
            return
        self._connection_lost = True
        logger.critical("Browser connection lost; every crawl on this session will fail until restart")

    async def acquire_page(self, url: str) -> BrowserPage:
        """Open an isolated page for a crawl of `url`.

        `url` is only used to name the target in failures; the page starts blank.
        """
        if self._browser is None:
            raise RuntimeError("browser session is not started")
        if self._connection_lost:
            raise NavigationFailure(url, RuntimeError("browser connection lost"))
        try:
            page = await self._browser.new_page(user_agent=self._options.user_agent)
        except PlaywrightError as e:
            raise NavigationFailure(url, e) from e
        return BrowserPage(page, self._options, url)

    async def stop(self) -> None:
        if self._browser is None:
            return
        self._stopping = True
        try:
            if not self._connection_lost:
                try:
                    await self._browser.close()
                except Exception as e:
                    logger.warning("Error closing browser during shutdown: %s", e)
            await self._playwright.stop()
        finally:
            self._disconnected.set()
            await self._watcher
            self._browser = None
            self._playwright = None
            self._watcher = None
            logger.info("Browser session stopped")
