"""
Test doubles for Playwright: a canned-HTML page, session managers and a
playwright factory built from mocks.
"""
from contextlib import asynccontextmanager
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from bs4 import BeautifulSoup

from crawler.navigation import PageSnapshot

EMPTY_HTML = "<html><head><title>Empty</title></head><body></body></html>"


class FakePage:
    """Stand-in for a Playwright page that serves canned HTML per URL.

    A value in ``pages`` that is an exception instance is raised from goto().
    """

    def __init__(self, pages=None, default_html=EMPTY_HTML):
        self.pages = dict(pages or {})
        self.default_html = default_html
        self.url = "about:blank"
        self.html = ""
        self.visited = []
        self.screenshots = []

    async def goto(self, url, wait_until="load", timeout=30000):
        self.visited.append(url)
        response = self.pages.get(url, self.default_html)
        if isinstance(response, Exception):
            raise response
        self.url = url
        self.html = response

    async def content(self):
        return self.html

    async def inner_text(self, selector):
        soup = BeautifulSoup(self.html, "lxml")
        return (soup.body or soup).get_text("\n")

    async def screenshot(self, path=None, full_page=False):
        self.screenshots.append(path)


class FakeSessionManager:
    """Session manager that hands out one FakePage and counts acquire/release"""

    def __init__(self, page=None, launch_error=None):
        self.page = page or FakePage()
        self.launch_error = launch_error
        self.acquired = 0
        self.released = 0
        self.profiles = []

    @asynccontextmanager
    async def session(self, profile="default"):
        if self.launch_error is not None:
            raise self.launch_error
        self.acquired += 1
        self.profiles.append(profile)
        try:
            yield SimpleNamespace(page=self.page, profile=profile)
        finally:
            self.released += 1


def make_playwright_factory(page, launch_error=None):
    """
    Build a callable shaped like ``async_playwright`` around mocks.

    Returns (factory, playwright, browser, context) so tests can assert on
    launch arguments and on close()/stop() calls.
    """
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.add_init_script = AsyncMock()

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    playwright = MagicMock()
    if launch_error is not None:
        playwright.chromium.launch = AsyncMock(side_effect=launch_error)
    else:
        playwright.chromium.launch = AsyncMock(return_value=browser)
    playwright.stop = AsyncMock()

    starter = MagicMock()
    starter.start = AsyncMock(return_value=playwright)
    factory = MagicMock(return_value=starter)
    return factory, playwright, browser, context


def make_snapshot(html, url="https://example.com/jobs", text=None):
    """PageSnapshot whose visible text is derived from the HTML unless given."""
    if text is None:
        soup = BeautifulSoup(html, "lxml")
        text = (soup.body or soup).get_text("\n")
    return PageSnapshot(url, html, text)


