"""
Base plugin interface for job board extraction.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from urllib.parse import urljoin, urlparse

from core.crawl_config import get_board_config
from core.field_extractors import FieldStrategy, body_text, element_text, first_element
from core.models import JobSource, JobStub
from core.text_heuristics import is_boilerplate, parse_listing_text

logger = logging.getLogger(__name__)

LIMITED_EXTRACTION_WARNING = "Limited job data extracted. The website structure may have changed."

MIN_CARD_TITLE_LENGTH = 3
MIN_LINK_TEXT_LENGTH = 10
MAX_LINK_TEXT_LENGTH = 200


class ListingResult:
    """Result from listing extraction"""
    def __init__(
        self,
        stubs: List[JobStub],
        strategy: Optional[str] = None,
        message: Optional[str] = None
    ):
        self.stubs = stubs
        self.strategy = strategy  # structural, links, text or placeholder
        self.message = message

    def is_success(self) -> bool:
        """Check if any real (non-placeholder) stub was found"""
        return len(self.stubs) > 0 and self.strategy != 'placeholder'

    def __repr__(self):
        return f"ListingResult(stubs={len(self.stubs)}, strategy={self.strategy})"


class BoardPlugin(ABC):
    """
    Base class for job board plugins.

    Each plugin supplies:
    1. The search URL for a role/location
    2. Selector lists for the structural and generic-link listing passes
    3. A description cascade for the board's job detail pages

    The listing passes run in order and stop at the first one that yields
    a stub; the text-heuristic parser is the last resort.
    """

    source: JobSource
    default_company: str = "Company not specified"
    default_location: str = "Location not specified"

    card_selectors: List[str] = []
    title_selectors: List[str] = ['h2', 'h3', 'h4', '[class*="title"]']
    link_selectors: List[str] = ["a[href*='job']"]
    location_selectors: List[str] = ['[class*="location"]']
    company_selectors: List[str] = []
    snippet_selectors: List[str] = []
    link_keywords: List[str] = ['job']

    # Whether detail extraction may fall back to the whole body text
    body_fallback: bool = True

    def __init__(self, name: str, priority: int = 50, config: Optional[Dict] = None):
        """
        Initialize plugin.

        Args:
            name: Board name (e.g., 'awign', 'indeed')
            priority: Listing order in the registry (higher first)
            config: Board configuration; loaded from core.crawl_config if omitted
        """
        self.name = name
        self.priority = priority
        self.config = config if config is not None else get_board_config(name)
        self.logger = logging.getLogger(f"{__name__}.{name}")

    @property
    def base_url(self) -> str:
        return self.config.get('base_url', '')

    @property
    def max_jobs(self) -> int:
        return int(self.config.get('max_jobs', 10))

    @abstractmethod
    def build_search_url(self, job_role: str, location: str = '') -> str:
        """Search results URL for a role (and optional location)."""
        pass

    @abstractmethod
    def detail_strategies(self) -> List[FieldStrategy]:
        """Ordered description cascade for this board's job pages."""
        pass

    # -- listing -------------------------------------------------------

    def extract_listing(self, snapshot, job_role: str) -> ListingResult:
        """
        Extract job stubs from a rendered search results page.

        Never returns an empty result: when every pass fails a single
        placeholder stub for the role is returned with an advisory message.
        """
        passes = [
            ('structural', self.extract_cards),
            ('links', self.extract_links),
            ('text', self.extract_text),
        ]
        for strategy, extract in passes:
            stubs = extract(snapshot, job_role)[:self.max_jobs]
            if stubs:
                self.logger.info(f"[{self.name}] {strategy} pass found {len(stubs)} jobs")
                return ListingResult(stubs, strategy=strategy)
            self.logger.debug(f"[{self.name}] {strategy} pass found nothing")

        self.logger.warning(f"[{self.name}] No jobs extracted for {job_role!r}, using placeholder")
        return ListingResult(
            [self.placeholder_stub(job_role, snapshot.url)],
            strategy='placeholder',
            message=LIMITED_EXTRACTION_WARNING
        )

    def extract_cards(self, snapshot, job_role: str) -> List[JobStub]:
        """Structural pass over job-card-like elements."""
        if not self.card_selectors:
            return []

        cards = snapshot.soup.select(', '.join(self.card_selectors))
        titles = {id(card): element_text(first_element(card, self.title_selectors)) for card in cards}
        stubs: List[JobStub] = []
        seen = set()

        for card in cards:
            if len(stubs) >= self.max_jobs:
                break
            # Wrappers around titled cards yield to those cards
            if any(len(titles.get(id(child), '')) > MIN_CARD_TITLE_LENGTH for child in card.find_all(True)):
                continue

            title = titles[id(card)]
            if len(title) <= MIN_CARD_TITLE_LENGTH or is_boilerplate(title):
                continue

            url = self.card_url(card)
            key = (title.lower(), url)
            if key in seen:
                continue
            seen.add(key)

            stubs.append(JobStub(
                title=title,
                url=url,
                company=self._card_field(card, self.company_selectors) or self.default_company,
                location=self._card_field(card, self.location_selectors) or self.default_location,
                snippet=self._card_field(card, self.snippet_selectors) or '',
            ))

        return stubs

    def extract_links(self, snapshot, job_role: str) -> List[JobStub]:
        """Generic pass over anchors whose href looks like a job link."""
        stubs: List[JobStub] = []
        seen = set()

        for link in snapshot.soup.find_all('a', href=True):
            if len(stubs) >= self.max_jobs:
                break
            href = link.get('href', '')
            if not any(keyword in href.lower() for keyword in self.link_keywords):
                continue
            text = element_text(link)
            if not (MIN_LINK_TEXT_LENGTH <= len(text) < MAX_LINK_TEXT_LENGTH) or is_boilerplate(text):
                continue

            url = self.resolve_url(href)
            if url in seen:
                continue
            seen.add(url)

            stubs.append(JobStub(
                title=text,
                url=url,
                company=self.default_company,
                location=self.default_location,
            ))

        return stubs

    def extract_text(self, snapshot, job_role: str) -> List[JobStub]:
        """Line-classifier pass over the visible page text."""
        stubs = parse_listing_text(
            snapshot.text,
            role=job_role,
            max_jobs=self.max_jobs,
            url=snapshot.url,
            company=self.default_company,
        )
        for stub in stubs:
            stub.location = stub.location or self.default_location
        return stubs

    def placeholder_stub(self, job_role: str, url: str) -> JobStub:
        return JobStub(
            title=f"{job_role} Position",
            url=url,
            company=self.default_company,
            location=self.default_location,
            description=(
                f"This is a {job_role} position on {self.display_name}. The crawler was unable "
                f"to extract detailed job information from the page. The page may have updated "
                f"its structure. Please visit the {self.display_name} job board directly for full details."
            ),
        )

    def card_url(self, card) -> str:
        link = first_element(card, self.link_selectors)
        if link is None:
            return ''
        href = link.get('href') or ''
        return self.resolve_url(href) if href else ''

    def _card_field(self, card, selectors: List[str]) -> str:
        if not selectors:
            return ''
        return element_text(first_element(card, selectors))

    # -- detail --------------------------------------------------------

    def needs_detail(self, stub: JobStub, listing_url: str = '') -> bool:
        """Only stubs without a description that link to a page on this board are visited."""
        if stub.description or not stub.url or stub.url == listing_url:
            return False
        return self.is_board_url(stub.url)

    def extract_detail(self, snapshot, stub: Optional[JobStub] = None) -> Optional[str]:
        """
        Recover the description from a rendered job page.

        Returns None when nothing passes the cascade and body fallback is
        disabled or empty.
        """
        soup = snapshot.soup
        for strategy in self.detail_strategies():
            text = strategy.extract(soup)
            if text:
                return text

        if self.body_fallback:
            text = body_text(soup, cap=self.config.get('body_fallback_cap', 3000))
            if text:
                self.logger.debug(f"[{self.name}] Using body text fallback for {snapshot.url[:80]}")
                return text

        return None

    def unavailable_description(self, stub: JobStub) -> str:
        return stub.snippet or "Job description not available."

    def blocked_description(self, stub: JobStub) -> str:
        return stub.snippet or f"{stub.title} at {stub.company}. Visit {self.display_name} for full details."

    def failed_description(self, stub: JobStub) -> str:
        return stub.snippet or "Failed to fetch job description."

    # -- urls ----------------------------------------------------------

    @property
    def display_name(self) -> str:
        return self.config.get('display_name') or self.name.title()

    def resolve_url(self, href: str) -> str:
        return urljoin(self.base_url + '/', href) if self.base_url else href

    def is_board_url(self, url: str) -> bool:
        host = urlparse(url).netloc.lower()
        board_host = urlparse(self.base_url).netloc.lower().replace('www.', '')
        return bool(board_host) and host.endswith(board_host)

    def __repr__(self):
        return f"<{self.__class__.__name__}(name={self.name}, priority={self.priority})>"
