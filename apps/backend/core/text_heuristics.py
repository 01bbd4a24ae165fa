"""
Line-based job extraction from unstructured page text.

Used when no structural selector matches a listing page. Each line of the
rendered text is classified as boilerplate, a job-title boundary, a location
or a description, and folded into the stub currently being built.
"""
import re
import logging
from typing import List, Optional

from core.models import JobStub

logger = logging.getLogger(__name__)

# Navigation, header and legal lines skipped before classification
BOILERPLATE = [
    'sign in', 'sign up', 'terms and conditions', 'privacy policy', 'admin login',
    'cookie policy', 'all rights reserved',
]
BOILERPLATE_RE = re.compile(
    r'\b(?:' + '|'.join(re.escape(marker) for marker in BOILERPLATE) + r')\b',
    re.IGNORECASE
)

# Role nouns that mark a line as a probable job title
ROLE_KEYWORDS = [
    'engineer', 'manager', 'developer', 'analyst', 'executive',
    'specialist', 'coordinator', 'associate',
]

LOCATION_GAZETTEER = [
    'bangalore', 'bengaluru', 'mumbai', 'delhi', 'hyderabad', 'chennai',
    'pune', 'kolkata', 'noida', 'gurgaon', 'gurugram', 'remote', 'hybrid', 'india',
]

PAGINATION = re.compile(r'^showing\b|\bpage \d+ of \d+\b|^\d+\s*-\s*\d+ of \d+', re.I)

MIN_LINE_LENGTH = 5
MIN_TITLE_LENGTH = 15
MAX_TITLE_LENGTH = 150
MIN_TITLE_WORDS = 2
MAX_TITLE_WORDS = 15
MAX_LOCATION_LENGTH = 100
MIN_DESCRIPTION_LENGTH = 50


def default_description(title: str) -> str:
    return (
        f"Job opportunity for {title} role. Please apply to learn more about "
        f"the specific requirements and responsibilities."
    )


def is_boilerplate(line: str) -> bool:
    if len(line) < MIN_LINE_LENGTH:
        return True
    return BOILERPLATE_RE.search(line) is not None


def is_title_line(line: str, role: str = '') -> bool:
    if not (MIN_TITLE_LENGTH <= len(line) < MAX_TITLE_LENGTH):
        return False
    if '@' in line or 'http' in line:
        return False
    # Sentences are descriptions, not titles
    if line.rstrip().endswith(('.', '!', '?', '…')):
        return False
    words = line.split()
    if not (MIN_TITLE_WORDS <= len(words) <= MAX_TITLE_WORDS):
        return False
    lower = line.lower()
    role = (role or '').strip().lower()
    if role and role in lower:
        return True
    return any(keyword in lower for keyword in ROLE_KEYWORDS)


def is_location_line(line: str) -> bool:
    if len(line) >= MAX_LOCATION_LENGTH:
        return False
    lower = line.lower()
    return any(place in lower for place in LOCATION_GAZETTEER)


def is_description_line(line: str) -> bool:
    return len(line) > MIN_DESCRIPTION_LENGTH and not PAGINATION.search(line)


def parse_listing_text(
    text: str,
    role: str = '',
    max_jobs: int = 10,
    url: str = '',
    company: Optional[str] = None
) -> List[JobStub]:
    """
    Split rendered page text into job stubs.

    A new stub starts on every title line; the previous one is flushed if it
    has a title. The result never holds more than ``max_jobs`` stubs.
    """
    stubs: List[JobStub] = []
    current: Optional[JobStub] = None

    def flush(stub: Optional[JobStub]):
        if stub is None or not stub.title or len(stubs) >= max_jobs:
            return
        if not stub.description:
            stub.description = default_description(stub.title)
        stubs.append(stub)

    for raw_line in (text or '').split('\n'):
        if len(stubs) >= max_jobs:
            break

        line = raw_line.strip()
        if not line or is_boilerplate(line):
            continue

        if is_title_line(line, role):
            flush(current)
            current = JobStub(title=line, url=url, company=company)
            continue

        if current is None:
            continue

        if is_location_line(line):
            current.location = line
        elif not current.description and is_description_line(line):
            current.description = line

    flush(current)

    logger.debug(f"[text_heuristics] Parsed {len(stubs)} stubs from {len(text or '')} chars")
    return stubs
