import asyncio
from types import SimpleNamespace

import pytest
from playwright.async_api import Error as PlaywrightError

from adcrawl.exceptions import NavigationFailure
from adcrawl.services.browser_session import BrowserPage, BrowserSession, PlaywrightBrowserOptions


class _FakePwPage:
    def __init__(self, html="<html></html>", goto_error=None, status=200, redirect_to=None, content_error=None):
        self.url = "about:blank"
        self._redirect_to = redirect_to
        self._content_error = content_error
        self._html = html
        self._goto_error = goto_error
        self._status = status
        self.goto_calls = []
        self.closed = False

    async def goto(self, url, wait_until=None, timeout=None):
        self.goto_calls.append((url, wait_until, timeout))
        if self._goto_error is not None:
            raise self._goto_error
        self.url = self._redirect_to or url
        return SimpleNamespace(status=self._status)

    async def content(self):
        if self._content_error is not None:
            raise self._content_error
        return self._html

    async def close(self):
        self.closed = True


class _FakeBrowser:
    def __init__(self, close_error=None, new_page_error=None):
        self.handlers = {}
        self._close_error = close_error
        self._new_page_error = new_page_error
        self.pages = []
        self.closed = False
        self.new_page_kwargs = []

    def on(self, event, handler):
        self.handlers[event] = handler

    async def new_page(self, **kwargs):
        self.new_page_kwargs.append(kwargs)
        if self._new_page_error is not None:
            raise self._new_page_error
        page = _FakePwPage()
        self.pages.append(page)
        return page

    async def close(self):
        if self._close_error is not None:
            raise self._close_error
        self.closed = True
        self.handlers["disconnected"](self)


class _FakePlaywright:
    def __init__(self, browser):
        self.launch_kwargs = None
        self.stopped = False
        self._browser = browser
        self.chromium = SimpleNamespace(launch=self._launch)

    async def _launch(self, **kwargs):
        self.launch_kwargs = kwargs
        return self._browser

    async def stop(self):
        self.stopped = True


class _FakeManager:
    def __init__(self, playwright):
        self._playwright = playwright

    async def start(self):
        return self._playwright


def _session(options=None, browser=None):
    browser = browser or _FakeBrowser()
    pw = _FakePlaywright(browser)
    session = BrowserSession(options=options, playwright_factory=lambda: _FakeManager(pw))
    return session, pw, browser


def test_start_launches_once_and_stop_tears_down():
    session, pw, browser = _session(PlaywrightBrowserOptions(headless=False, executable_path="/opt/chrome"))

    async def _run():
        await session.start()
        assert session.is_alive
        with pytest.raises(RuntimeError, match="already started"):
            await session.start()
        await session.stop()

    asyncio.run(_run())
    assert pw.launch_kwargs == {"headless": False, "executable_path": "/opt/chrome"}
    assert browser.closed
    assert pw.stopped
    assert not session.started
    assert not session.is_alive


def test_stop_without_start_is_noop():
    session, pw, browser = _session()
    asyncio.run(session.stop())
    assert not browser.closed


def test_acquire_page_before_start_raises():
    session, _, _ = _session()
    with pytest.raises(RuntimeError, match="not started"):
        asyncio.run(session.acquire_page("https://example/search"))


def test_each_acquire_opens_a_distinct_page():
    session, _, browser = _session(PlaywrightBrowserOptions(user_agent="TestBot/1.0"))

    async def _run():
        await session.start()
        first = await session.acquire_page("https://example/a")
        second = await session.acquire_page("https://example/b")
        await session.stop()
        return first, second

    first, second = asyncio.run(_run())
    assert isinstance(first, BrowserPage)
    assert first is not second
    assert len(browser.pages) == 2
    assert browser.new_page_kwargs == [{"user_agent": "TestBot/1.0"}] * 2


def test_unexpected_disconnect_is_fatal_for_later_crawls():
    session, pw, browser = _session()

    async def _run():
        await session.start()
        browser.handlers["disconnected"](browser)
        await asyncio.sleep(0)
        assert not session.is_alive
        with pytest.raises(NavigationFailure, match="browser connection lost"):
            await session.acquire_page("https://example/search")
        await session.stop()

    asyncio.run(_run())
    # the dead browser is not closed again, but playwright is still stopped
    assert not browser.closed
    assert pw.stopped


def test_page_navigate_uses_configured_load_state_and_timeout():
    pw_page = _FakePwPage()
    page = BrowserPage(pw_page, PlaywrightBrowserOptions(timeout_ms=0, wait_until="networkidle"))

    asyncio.run(page.navigate("https://example/search"))

    assert pw_page.goto_calls == [("https://example/search", "networkidle", 0)]
    assert page.url == "https://example/search"


def test_page_navigate_wraps_playwright_errors():
    pw_page = _FakePwPage(goto_error=PlaywrightError("net::ERR_NAME_NOT_RESOLVED"))
    page = BrowserPage(pw_page, PlaywrightBrowserOptions())

    with pytest.raises(NavigationFailure) as exc:
        asyncio.run(page.navigate("https://nowhere.invalid/"))
    assert exc.value.url == "https://nowhere.invalid/"


def test_page_navigate_tolerates_error_status(caplog):
    pw_page = _FakePwPage(status=404)
    page = BrowserPage(pw_page, PlaywrightBrowserOptions())

    asyncio.run(page.navigate("https://example/gone"))
    assert "Non-success status for https://example/gone: 404" in caplog.text


def test_page_content_and_close():
    pw_page = _FakePwPage(html="<p>hi</p>")
    page = BrowserPage(pw_page, PlaywrightBrowserOptions())

    async def _run():
        html = await page.content()
        await page.close()
        return html

    assert asyncio.run(_run()) == "<p>hi</p>"
    assert pw_page.closed


def test_stop_still_stops_playwright_when_browser_close_fails():
    browser = _FakeBrowser(close_error=PlaywrightError("Target page, context or browser has been closed"))
    session, pw, _ = _session(browser=browser)

    async def _run():
        await session.start()
        await session.stop()

    asyncio.run(_run())
    assert pw.stopped
    assert not session.started


def test_new_page_error_names_crawl_url():
    browser = _FakeBrowser(new_page_error=PlaywrightError("Browser has been closed"))
    session, _, _ = _session(browser=browser)

    async def _run():
        await session.start()
        try:
            await session.acquire_page("https://example/search")
        finally:
            await session.stop()

    with pytest.raises(NavigationFailure) as exc:
        asyncio.run(_run())
    assert exc.value.url == "https://example/search"


def test_content_error_after_redirect_names_requested_url():
    pw_page = _FakePwPage(
        redirect_to="https://example/login",
        content_error=PlaywrightError("Execution context was destroyed"),
    )
    page = BrowserPage(pw_page, PlaywrightBrowserOptions(), "https://example/search")

    async def _run():
        await page.navigate("https://example/l1")
        await page.content()

    with pytest.raises(NavigationFailure) as exc:
        asyncio.run(_run())
    assert exc.value.url == "https://example/l1"
    assert page.url == "https://example/l1"
    assert page.current_url == "https://example/login"
