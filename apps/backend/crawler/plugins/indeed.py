"""
Indeed extraction plugin.

Search results are cards (.job_seen_beacon / .tapItem / data-testid
job-card) carrying a job key in ``data-jk``; the key is turned into a direct
/viewjob URL. Detail pages keep the description in #jobDescriptionText on
most layouts. Indeed sits behind Cloudflare, so the stealth browser profile
is used and the listing snippet is kept as the fallback description.
"""
from typing import Dict, List, Optional
from urllib.parse import urlencode

from .base import BoardPlugin
from core.field_extractors import FieldStrategy, first_element
from core.models import JobSource

DESCRIPTION_SELECTORS = [
    '#jobDescriptionText',
    '[data-testid="job-description"]',
    '.jobsearch-jobDescriptionText',
    '[class*="jobDescription"]',
    '.job-description',
    '#jobDescription',
    'div[id="jobDescriptionText"]',
]

LAYOUT_SELECTORS = ['main', 'article', '.jobsearch-ViewJobLayout']


class IndeedPlugin(BoardPlugin):
    """Plugin for Indeed job extraction"""

    source = JobSource.INDEED

    card_selectors = [
        '.job_seen_beacon',
        '.jobsearch-ResultsList > li',
        '[data-testid="job-card"]',
        '.result',
        '.tapItem',
    ]
    title_selectors = [
        'h2.jobTitle a',
        '[data-testid="job-title"] a',
        '.jobTitle a',
        'h2 a',
        'a[data-jk]',
        'h2.jobTitle',
        '.jobTitle',
        'h2',
    ]
    link_selectors = ['a[data-jk]', 'a[href*="/rc/clk"]', 'a[href*="viewjob"]', 'h2 a', '.jobTitle a']
    company_selectors = [
        '[data-testid="company-name"]',
        '.companyName',
        '.company',
        '[class*="company"]',
        'span[class*="companyName"]',
    ]
    location_selectors = [
        '[data-testid="text-location"]',
        '.companyLocation',
        '[class*="location"]',
        'div[class*="companyLocation"]',
    ]
    snippet_selectors = [
        '.job-snippet',
        '[class*="snippet"]',
        '.summary',
        '[class*="description"]',
        'ul[style]',
    ]
    link_keywords = ['viewjob', '/rc/clk', 'jk=', '/job/']

    # The listing snippet is preferred over an unrelated page body
    body_fallback = False

    def __init__(self, config: Optional[Dict] = None):
        super().__init__(name="indeed", priority=50, config=config)

    def build_search_url(self, job_role: str, location: str = '') -> str:
        search_url = self.config.get('search_url', f"{self.base_url}/jobs")
        params = urlencode({'q': job_role, 'l': location or '', 'sort': 'date'})
        return f"{search_url}?{params}"

    def card_url(self, card) -> str:
        link = first_element(card, self.link_selectors)
        if link is None:
            return ''
        job_key = link.get('data-jk')
        if job_key:
            return f"{self.base_url}/viewjob?jk={job_key}"
        href = link.get('href') or ''
        return self.resolve_url(href) if href else ''

    def detail_strategies(self) -> List[FieldStrategy]:
        return [
            FieldStrategy(
                'description',
                DESCRIPTION_SELECTORS,
                min_length=50,
                cap=self.config.get('description_cap', 5000),
                separator='\n',
            ),
            FieldStrategy(
                'layout',
                LAYOUT_SELECTORS,
                min_length=100,
                cap=self.config.get('body_fallback_cap', 3000),
                separator='\n',
            ),
        ]
