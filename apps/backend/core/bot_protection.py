"""
Bot-protection challenge detection.

Best-effort substring checks against the rendered HTML and the visible page
text. False positives are acceptable: the caller falls back to manual entry.
"""
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Markers found in challenge-page markup (Cloudflare interstitials, CAPTCHA widgets)
HTML_MARKERS = [
    'ray id',
    'challenge-platform',
    'captcha',
    'cf-chl',
    '<title>just a moment',
]

# Markers found in the visible text of block pages
TEXT_MARKERS = [
    'verify you are a human',
    'verify you are human',
    'access denied',
    'checking your browser',
    'enable javascript and cookies to continue',
]


def detect_block(page_html: Optional[str], page_text: Optional[str]) -> Optional[str]:
    """
    Return the first challenge marker found, or None.

    Text markers are also checked against the HTML since some challenge pages
    render no body text until their script runs.
    """
    html = (page_html or '').lower()
    text = (page_text or '').lower()

    for marker in HTML_MARKERS:
        if marker in html:
            return marker

    for marker in TEXT_MARKERS:
        if marker in text or marker in html:
            return marker

    return None


def is_blocked(page_html: Optional[str], page_text: Optional[str]) -> bool:
    marker = detect_block(page_html, page_text)
    if marker:
        logger.info(f"[bot_protection] Challenge marker detected: {marker!r}")
        return True
    return False
