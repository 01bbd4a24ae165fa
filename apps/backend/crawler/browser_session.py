"""
Headless browser sessions using Playwright.

One isolated Chromium per request. Sessions must be released on every exit
path; use BrowserSessionManager.session() rather than acquire()/release()
directly.
"""
import logging
from contextlib import asynccontextmanager
from typing import Callable, Dict, Optional

from playwright.async_api import async_playwright, Browser, BrowserContext, Page, Playwright

from core.errors import LaunchFailure, MalformedInput

logger = logging.getLogger(__name__)

USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

BASE_ARGS = ['--no-sandbox', '--disable-setuid-sandbox']

STEALTH_ARGS = BASE_ARGS + [
    '--disable-blink-features=AutomationControlled',
    '--disable-infobars',
    '--disable-dev-shm-usage',
    '--disable-accelerated-2d-canvas',
    '--disable-gpu',
    '--window-size=1920,1080',
]

STEALTH_INIT_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', {get: () => undefined});
Object.defineProperty(navigator, 'languages', {get: () => ['en-US', 'en']});
"""

PROFILES: Dict[str, Dict] = {
    'default': {
        'args': BASE_ARGS,
        'headers': {
            'Accept-Language': 'en-US,en;q=0.9',
        },
        'viewport': None,
        'init_script': None,
    },
    'stealth': {
        'args': STEALTH_ARGS,
        'headers': {
            'Accept-Language': 'en-US,en;q=0.9',
            'Accept-Encoding': 'gzip, deflate, br',
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
        },
        'viewport': {'width': 1920, 'height': 1080},
        'init_script': STEALTH_INIT_SCRIPT,
    },
}


class BrowserSession:
    """Handle on one launched browser and its single page"""

    def __init__(
        self,
        playwright: Playwright,
        browser: Browser,
        context: BrowserContext,
        page: Page,
        profile: str
    ):
        self.playwright = playwright
        self.browser = browser
        self.context = context
        self.page = page
        self.profile = profile
        self.released = False

    def __repr__(self):
        return f"<BrowserSession(profile={self.profile}, released={self.released})>"


class BrowserSessionManager:
    """Launches and tears down isolated headless browsers"""

    def __init__(self, headless: bool = True, playwright_factory: Optional[Callable] = None):
        self.headless = headless
        self._playwright_factory = playwright_factory or async_playwright

    async def acquire(self, profile: str = 'default') -> BrowserSession:
        """
        Launch a browser configured with the given profile.

        Raises:
            MalformedInput: unknown profile name
            LaunchFailure: the browser could not be started (no retry)
        """
        settings = PROFILES.get(profile)
        if settings is None:
            raise MalformedInput(f"Unknown browser profile: {profile}")

        playwright = None
        browser = None
        try:
            playwright = await self._playwright_factory().start()
            browser = await playwright.chromium.launch(headless=self.headless, args=settings['args'])

            context_options = {
                'user_agent': USER_AGENT,
                'extra_http_headers': settings['headers'],
            }
            if settings['viewport']:
                context_options['viewport'] = settings['viewport']
            context = await browser.new_context(**context_options)
            if settings['init_script']:
                await context.add_init_script(settings['init_script'])
            page = await context.new_page()
        except Exception as e:
            logger.error(f"[browser] Launch failed (profile={profile}): {e}")
            await self._shutdown(playwright, browser)
            raise LaunchFailure(f"Failed to launch browser: {e}") from e

        logger.debug(f"[browser] Launched session (profile={profile}, headless={self.headless})")
        return BrowserSession(playwright, browser, context, page, profile)

    async def release(self, session: BrowserSession):
        """Terminate the browser process. Safe to call more than once."""
        if session.released:
            return
        session.released = True
        await self._shutdown(session.playwright, session.browser)
        logger.debug(f"[browser] Released session (profile={session.profile})")

    @asynccontextmanager
    async def session(self, profile: str = 'default'):
        session = await self.acquire(profile)
        try:
            yield session
        finally:
            await self.release(session)

    async def _shutdown(self, playwright: Optional[Playwright], browser: Optional[Browser]):
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                logger.warning(f"[browser] Error closing browser: {e}")
        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                logger.warning(f"[browser] Error stopping playwright: {e}")
