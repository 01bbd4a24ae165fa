"""
Job crawler: board search and single job URL fetch.

Each call owns one headless browser and one page, used strictly
sequentially, and releases the browser on every exit path. No exception
escapes search() or fetch_single(); failures are reported through the
result objects.
"""
import argparse
import asyncio
import json
import logging
from typing import Dict, Optional
from urllib.parse import urlparse

from core.bot_protection import detect_block, is_blocked
from core.crawl_config import delays_disabled, get_board_config
from core.errors import CrawlerError, ExtractionEmpty, LaunchFailure, MalformedInput, NavigationTimeout
from core.models import CrawlResult, FailureReason, JobSource, JobStub, SingleJobResult
from core.normalize import DEFAULT_DESCRIPTION, make_job_id, normalize
from core.pacing import NoDelayPacer, Pacer
from crawler.browser_session import BrowserSessionManager
from crawler.navigation import Navigator
from crawler.plugins import BoardPlugin, GenericDetailExtractor, PluginRegistry, get_plugin_registry

logger = logging.getLogger(__name__)

BOT_PROTECTION_MESSAGE = "Bot protection detected. Please paste the job description manually."
INSUFFICIENT_CONTENT_MESSAGE = (
    "Could not extract job description from the page. The page structure may be "
    "unsupported. Please paste the job description manually."
)
FETCH_FAILED_MESSAGE = "Failed to fetch job. Please paste the job description manually."


def validate_job_url(job_url: Optional[str]) -> str:
    """Return the trimmed URL, or raise MalformedInput."""
    url = (job_url or '').strip()
    if not url:
        raise MalformedInput("Job URL is required")
    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise MalformedInput("Invalid URL format")
    return url


class JobCrawler:
    """Multi-source job extraction over a headless browser"""

    def __init__(
        self,
        session_manager: Optional[BrowserSessionManager] = None,
        navigator: Optional[Navigator] = None,
        registry: Optional[PluginRegistry] = None,
        detail_extractor: Optional[GenericDetailExtractor] = None,
        single_config: Optional[Dict] = None
    ):
        self.single_config = single_config or get_board_config('single')
        self.session_manager = session_manager or BrowserSessionManager(
            headless=self.single_config.get('headless', True)
        )
        self.navigator = navigator or Navigator(
            pacer=NoDelayPacer() if delays_disabled() else Pacer()
        )
        self.registry = registry or get_plugin_registry()
        self.detail_extractor = detail_extractor or GenericDetailExtractor(self.single_config)

    # -- board search --------------------------------------------------

    async def search(self, job_role: str, board: str = 'awign', location: str = '') -> CrawlResult:
        """
        Search a job board for a role and enrich each hit with its description.

        Returns a CrawlResult whose ``error`` is a warning when jobs were found
        and the failure reason when none were.
        """
        role = (job_role or '').strip()
        try:
            if not role:
                raise MalformedInput("Job role is required")
            plugin = self.registry.plugin_for(board)
        except MalformedInput as e:
            logger.warning(f"[crawler] Rejected search request: {e}")
            return CrawlResult(jobs=[], error=str(e))

        search_url = plugin.build_search_url(role, location or '')
        logger.info(f"[crawler] Searching {plugin.name} for {role!r}: {search_url}")

        try:
            async with self.session_manager.session(plugin.config.get('profile', 'default')) as session:
                return await self._crawl_board(session.page, plugin, role, search_url)
        except CrawlerError as e:
            logger.error(f"[crawler] {plugin.name} crawl failed: {e}")
            return CrawlResult(jobs=[], error=str(e))
        except Exception as e:
            logger.error(f"[crawler] {plugin.name} crawl error: {e}", exc_info=True)
            return CrawlResult(jobs=[], error=str(e) or f"Unknown error during {plugin.display_name} crawling")

    async def _crawl_board(self, page, plugin: BoardPlugin, role: str, search_url: str) -> CrawlResult:
        config = plugin.config
        await self.navigator.navigate(
            page,
            search_url,
            timeout_ms=config['listing_timeout_ms'],
            wait_until=config['wait_until'],
            settle=config['listing_settle'],
        )
        snapshot = await self.navigator.snapshot(page)

        marker = detect_block(snapshot.html, snapshot.text)
        if marker:
            logger.warning(f"[crawler] Bot protection on {plugin.name} listing page ({marker!r})")
            return CrawlResult(
                jobs=[],
                blocked=True,
                error=f"Bot protection detected on {plugin.display_name}. Try again later or add the job manually.",
            )

        listing = plugin.extract_listing(snapshot, role)

        jobs = []
        visited = 0
        for index, stub in enumerate(listing.stubs):
            if plugin.needs_detail(stub, snapshot.url):
                stub.description = await self._enrich(page, plugin, stub)
                visited += 1
            elif not stub.description:
                stub.description = plugin.unavailable_description(stub)
            jobs.append(normalize(stub, source=plugin.source, index=index, cap=config['description_cap']))

        logger.info(
            f"[crawler] {plugin.name}: {len(jobs)} jobs via {listing.strategy} pass, "
            f"{visited} detail pages visited"
        )
        return CrawlResult(jobs=jobs, error=listing.message)

    async def _enrich(self, page, plugin: BoardPlugin, stub: JobStub) -> str:
        """
        Visit a stub's detail page and return its description.

        Failures degrade this one record to its snippet or a placeholder.
        """
        config = plugin.config
        await self.navigator.pacer.between_requests(config['request_delay'])
        try:
            await self.navigator.navigate(
                page,
                stub.url,
                timeout_ms=config['detail_timeout_ms'],
                wait_until=config['wait_until'],
                settle=config['detail_settle'],
            )
            snapshot = await self.navigator.snapshot(page)

            if is_blocked(snapshot.html, snapshot.text):
                logger.warning(f"[crawler] Challenge page for {stub.url}, using snippet instead")
                return plugin.blocked_description(stub)

            return plugin.extract_detail(snapshot, stub) or stub.snippet or DEFAULT_DESCRIPTION
        except NavigationTimeout as e:
            logger.warning(f"[crawler] {e}; keeping listing data for {stub.title!r}")
            return plugin.failed_description(stub)
        except Exception as e:
            logger.error(f"[crawler] Failed to fetch details for job {stub.title!r}: {e}")
            return plugin.failed_description(stub)

    # -- single URL ----------------------------------------------------

    async def fetch_single(self, job_url: str) -> SingleJobResult:
        """
        Fetch and extract one job page.

        ``blocked=True`` on any failure after input validation, so the caller
        always offers manual entry; ``reason`` says why.
        """
        try:
            url = validate_job_url(job_url)
        except MalformedInput as e:
            return SingleJobResult(success=False, error=str(e), blocked=False)

        logger.info(f"[crawler] Fetching single job URL: {url}")
        try:
            async with self.session_manager.session(self.single_config.get('profile', 'stealth')) as session:
                return await self._fetch_job_page(session.page, url)
        except LaunchFailure as e:
            logger.error(f"[crawler] {e}")
            return self._failure(str(e), FailureReason.LAUNCH_FAILURE)
        except NavigationTimeout as e:
            return self._failure(str(e), FailureReason.NAVIGATION_TIMEOUT)
        except ExtractionEmpty as e:
            logger.warning(f"[crawler] Insufficient content on {url}")
            return self._failure(str(e), FailureReason.INSUFFICIENT_CONTENT)
        except Exception as e:
            logger.error(f"[crawler] Single job fetch error for {url}: {e}", exc_info=True)
            return self._failure(str(e) or FETCH_FAILED_MESSAGE, FailureReason.ERROR)

    async def _fetch_job_page(self, page, url: str) -> SingleJobResult:
        config = self.single_config
        await self.navigator.navigate(
            page,
            url,
            timeout_ms=config['listing_timeout_ms'],
            wait_until=config['wait_until'],
            settle=config['listing_settle'],
        )
        snapshot = await self.navigator.snapshot(page)

        marker = detect_block(snapshot.html, snapshot.text)
        if marker:
            logger.warning(f"[crawler] Bot protection detected on {url} ({marker!r})")
            return self._failure(BOT_PROTECTION_MESSAGE, FailureReason.BOT_PROTECTION)

        fields = self.detail_extractor.extract(snapshot)
        if not self.detail_extractor.has_enough_content(fields):
            raise ExtractionEmpty(INSUFFICIENT_CONTENT_MESSAGE)

        job = normalize(
            dict(fields, id=make_job_id(JobSource.MANUAL.value), url=url),
            source=JobSource.MANUAL,
            cap=self.detail_extractor.description_cap,
        )
        return SingleJobResult(success=True, job=job)

    @staticmethod
    def _failure(error: str, reason: FailureReason) -> SingleJobResult:
        return SingleJobResult(success=False, error=error, blocked=True, reason=reason)


async def _run_cli(args) -> dict:
    crawler = JobCrawler()
    if args.url:
        result = await crawler.fetch_single(args.url)
    else:
        result = await crawler.search(args.role, args.board, args.location)
    return result.model_dump(mode='json')


def main():
    parser = argparse.ArgumentParser(description="Crawl a job board or fetch a single job page")
    parser.add_argument('role', nargs='?', default='', help="Job role to search for")
    parser.add_argument('--board', default='awign', help="Job board: awign or indeed")
    parser.add_argument('--location', default='', help="Location filter (indeed only)")
    parser.add_argument('--url', help="Fetch a single job URL instead of searching")
    args = parser.parse_args()

    if not args.url and not args.role:
        parser.error("either a role or --url is required")

    logging.basicConfig(level=logging.INFO)
    print(json.dumps(asyncio.run(_run_cli(args)), indent=2))


if __name__ == '__main__':
    main()
