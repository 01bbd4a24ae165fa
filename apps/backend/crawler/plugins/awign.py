"""
Awign Expert extraction plugin.

Awign renders its job explorer client-side with generated class names, so
the listing passes are loose:
1. Any element whose class mentions job/card/listing, with a nested heading
2. Anchors pointing at job or explore pages
3. Line-by-line classification of the rendered text
"""
from typing import Dict, List, Optional
from urllib.parse import quote

from .base import BoardPlugin
from core.field_extractors import FieldStrategy
from core.models import JobSource, JobStub

DESCRIPTION_SELECTORS = [
    '[class*="description"]',
    '[class*="content"]',
    '[class*="detail"]',
    '[class*="job-info"]',
    'article',
    'main',
    '.prose',
]


class AwignPlugin(BoardPlugin):
    """Plugin for Awign Expert job extraction"""

    source = JobSource.AWIGN
    default_company = "Awign"
    default_location = "Remote/India"

    card_selectors = ['[class*="job"]', '[class*="card"]', '[class*="listing"]']
    title_selectors = ['h2', 'h3', 'h4', '[class*="title"]', '[class*="name"]']
    link_selectors = ["a[href*='job']"]
    location_selectors = ['[class*="location"]', '[class*="place"]']
    link_keywords = ['job', 'explore']

    def __init__(self, config: Optional[Dict] = None):
        super().__init__(name="awign", priority=60, config=config)

    def build_search_url(self, job_role: str, location: str = '') -> str:
        # Awign's explorer has no location filter
        search_url = self.config.get('search_url', f"{self.base_url}/jobs/explore")
        return f"{search_url}?page=1&jobTitle={quote(job_role)}"

    def detail_strategies(self) -> List[FieldStrategy]:
        return [
            FieldStrategy(
                'description',
                DESCRIPTION_SELECTORS,
                min_length=100,
                cap=self.config.get('description_cap', 5000),
                separator='\n',
            ),
        ]

    def unavailable_description(self, stub: JobStub) -> str:
        return stub.snippet or "Job description not available - external link."
