"""
Paced page navigation and rendered-page snapshots.
"""
import hashlib
import logging
import os
from typing import Optional, Sequence

from bs4 import BeautifulSoup
from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError

from core.errors import NavigationTimeout
from core.pacing import Pacer

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000


class PageSnapshot:
    """Rendered HTML and visible text of a page at one point in time"""

    def __init__(self, url: str, html: str, text: str):
        self.url = url
        self.html = html or ''
        self.text = text or ''
        self._soup: Optional[BeautifulSoup] = None

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(self.html, 'lxml')
        return self._soup

    def __repr__(self):
        return f"PageSnapshot(url={self.url[:80]!r}, html={len(self.html)}, text={len(self.text)})"


class Navigator:
    """Navigates a page and waits for it to settle before it is read"""

    def __init__(self, pacer: Optional[Pacer] = None, screenshot_dir: Optional[str] = None):
        self.pacer = pacer or Pacer()
        self.screenshot_dir = screenshot_dir or os.getenv('JOBLENS_SCREENSHOT_DIR')

    async def navigate(
        self,
        page: Page,
        url: str,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        wait_until: str = 'networkidle',
        settle: Optional[Sequence[float]] = None
    ):
        """
        Load ``url`` and wait for the requested readiness state.

        Raises:
            NavigationTimeout: the page did not settle within ``timeout_ms``
        """
        logger.info(f"[navigation] Navigating to {url}")
        try:
            await page.goto(url, wait_until=wait_until, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            logger.error(f"[navigation] Timed out after {timeout_ms}ms: {url}")
            await self._capture_screenshot(page, url)
            raise NavigationTimeout(url, timeout_ms) from e

        await self.pacer.settle(settle)

    async def snapshot(self, page: Page) -> PageSnapshot:
        html = await page.content()
        try:
            text = await page.inner_text('body')
        except Exception as e:
            logger.debug(f"[navigation] inner_text failed, using parsed body text: {e}")
            soup = BeautifulSoup(html, 'lxml')
            text = (soup.body or soup).get_text('\n')
        return PageSnapshot(page.url, html, text)

    async def _capture_screenshot(self, page: Page, url: str):
        if not self.screenshot_dir:
            return
        try:
            path = os.path.join(
                self.screenshot_dir,
                f"nav_error_{hashlib.sha256(url.encode()).hexdigest()[:8]}.png"
            )
            await page.screenshot(path=path, full_page=True)
            logger.info(f"[navigation] Screenshot saved: {path}")
        except Exception as screenshot_error:
            logger.debug(f"[navigation] Failed to capture screenshot: {screenshot_error}")
