"""
Tests for browser session acquisition and release.
"""

import pytest

from core.errors import LaunchFailure, MalformedInput
from crawler.browser_session import BrowserSessionManager, STEALTH_INIT_SCRIPT

from tests.fakes import FakePage, make_playwright_factory


class TestAcquire:
    """Launching browsers per profile."""

    @pytest.mark.asyncio
    async def test_default_profile(self):
        page = FakePage()
        factory, playwright, browser, context = make_playwright_factory(page)
        manager = BrowserSessionManager(headless=True, playwright_factory=factory)

        session = await manager.acquire("default")

        assert session.page is page
        launch_kwargs = playwright.chromium.launch.call_args.kwargs
        assert launch_kwargs["headless"] is True
        assert "--no-sandbox" in launch_kwargs["args"]
        assert "viewport" not in browser.new_context.call_args.kwargs
        context.add_init_script.assert_not_called()

    @pytest.mark.asyncio
    async def test_stealth_profile(self):
        factory, playwright, browser, context = make_playwright_factory(FakePage())
        manager = BrowserSessionManager(headless=False, playwright_factory=factory)

        await manager.acquire("stealth")

        launch_kwargs = playwright.chromium.launch.call_args.kwargs
        assert launch_kwargs["headless"] is False
        assert "--disable-blink-features=AutomationControlled" in launch_kwargs["args"]
        context_kwargs = browser.new_context.call_args.kwargs
        assert context_kwargs["viewport"] == {"width": 1920, "height": 1080}
        assert "Accept-Language" in context_kwargs["extra_http_headers"]
        context.add_init_script.assert_awaited_once_with(STEALTH_INIT_SCRIPT)

    @pytest.mark.asyncio
    async def test_unknown_profile_never_launches(self):
        factory, _, _, _ = make_playwright_factory(FakePage())
        manager = BrowserSessionManager(playwright_factory=factory)

        with pytest.raises(MalformedInput):
            await manager.acquire("turbo")
        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_launch_failure_cleans_up(self):
        factory, playwright, _, _ = make_playwright_factory(
            FakePage(), launch_error=RuntimeError("No usable sandbox!")
        )
        manager = BrowserSessionManager(playwright_factory=factory)

        with pytest.raises(LaunchFailure, match="No usable sandbox"):
            await manager.acquire("default")
        playwright.stop.assert_awaited_once()


class TestRelease:
    """Browser processes are terminated exactly once."""

    @pytest.mark.asyncio
    async def test_release_is_idempotent(self):
        factory, playwright, browser, _ = make_playwright_factory(FakePage())
        manager = BrowserSessionManager(playwright_factory=factory)

        session = await manager.acquire("default")
        await manager.release(session)
        await manager.release(session)

        assert session.released
        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_context_manager_releases_on_error(self):
        factory, playwright, browser, _ = make_playwright_factory(FakePage())
        manager = BrowserSessionManager(playwright_factory=factory)

        with pytest.raises(ValueError):
            async with manager.session("stealth"):
                raise ValueError("extraction blew up")

        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_errors_do_not_block_stop(self):
        factory, playwright, browser, _ = make_playwright_factory(FakePage())
        browser.close.side_effect = RuntimeError("Target closed")
        manager = BrowserSessionManager(playwright_factory=factory)

        async with manager.session("default"):
            pass

        playwright.stop.assert_awaited_once()
