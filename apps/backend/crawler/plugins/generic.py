"""
Generic job page extraction.

Used for single arbitrary job URLs. Each field has its own selector cascade
covering common ATS and job-board markup; the description falls back to
the body text when no container qualifies.
"""
import logging
from typing import Dict, List, Optional

from core.crawl_config import get_board_config
from core.field_extractors import FieldStrategy, body_text, extract_fields

logger = logging.getLogger(__name__)

TITLE_SELECTORS = [
    'h1',
    '[data-testid="job-title"]',
    '.job-title',
    '.jobTitle',
    '[class*="JobTitle"]',
    '[class*="job-title"]',
    'h2[class*="title"]',
]

COMPANY_SELECTORS = [
    '[data-testid="company-name"]',
    '.company-name',
    '.companyName',
    '[class*="company"]',
    '[class*="Company"]',
    'a[href*="company"]',
]

LOCATION_SELECTORS = [
    '[data-testid="location"]',
    '[data-testid="text-location"]',
    '.location',
    '.companyLocation',
    '[class*="location"]',
    '[class*="Location"]',
]

DESCRIPTION_SELECTORS = [
    '#jobDescriptionText',
    '[data-testid="job-description"]',
    '.job-description',
    '.jobDescription',
    '[class*="description"]',
    '[class*="Description"]',
    'article',
    'main',
    '.content',
    '#content',
]

# Body text shorter than this is not worth using as a description
MIN_BODY_FALLBACK_LENGTH = 200
# Below this the page is treated as unsupported and the user pastes manually
MIN_DESCRIPTION_LENGTH = 50


class GenericDetailExtractor:
    """Field-by-field extraction for arbitrary job pages"""

    def __init__(self, config: Optional[Dict] = None):
        self.config = config if config is not None else get_board_config('single')

    @property
    def description_cap(self) -> int:
        return int(self.config.get('description_cap', 8000))

    @property
    def body_fallback_cap(self) -> int:
        return int(self.config.get('body_fallback_cap', 5000))

    def strategies(self) -> List[FieldStrategy]:
        return [
            FieldStrategy('title', TITLE_SELECTORS, min_length=3, max_length=200),
            FieldStrategy('company', COMPANY_SELECTORS, min_length=1, max_length=100),
            FieldStrategy('location', LOCATION_SELECTORS, min_length=2, max_length=150),
            FieldStrategy(
                'description',
                DESCRIPTION_SELECTORS,
                min_length=100,
                cap=self.description_cap,
                separator='\n',
            ),
        ]

    def extract(self, snapshot) -> Dict[str, str]:
        """
        Extract title, company, location and description.

        Missing fields come back as ''. The caller enforces the description
        quality floor (see has_enough_content).
        """
        soup = snapshot.soup
        fields = extract_fields(soup, self.strategies())

        if not fields['description']:
            text = body_text(soup)
            if len(text) > MIN_BODY_FALLBACK_LENGTH:
                logger.debug(f"[generic] Using body text fallback for {snapshot.url[:80]}")
                fields['description'] = text[:self.body_fallback_cap]

        return fields

    @staticmethod
    def has_enough_content(fields: Dict[str, str]) -> bool:
        return len(fields.get('description') or '') >= MIN_DESCRIPTION_LENGTH
