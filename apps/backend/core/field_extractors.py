"""
Cascading selector extraction utilities.

A field is recovered by trying an ordered list of CSS selectors and keeping
the first element whose text passes the field's length gate. Each
FieldStrategy is independent, so every board's selector lists can be
tested on their own.
"""

import re
import logging
from typing import Dict, Iterable, Optional, Sequence

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'[ \t\r\f\v]+')
_BLANK_LINES = re.compile(r'\n{2,}')


def clean_text(text: Optional[str]) -> str:
    """Collapse runs of spaces and blank lines, strip the ends."""
    if not text:
        return ''
    text = _WHITESPACE.sub(' ', text)
    text = '\n'.join(line.strip() for line in text.split('\n'))
    text = _BLANK_LINES.sub('\n', text)
    return text.strip()


def element_text(element, separator: str = ' ') -> str:
    if element is None:
        return ''
    return clean_text(element.get_text(separator))


def body_text(soup: BeautifulSoup, cap: Optional[int] = None) -> str:
    """Text of the whole document body, optionally truncated."""
    body = soup.body or soup
    text = element_text(body, separator='\n')
    return text[:cap] if cap else text


class FieldStrategy:
    """
    Ordered selector list for one field, with a length gate.

    ``min_length`` and ``max_length`` are exclusive bounds. Only the first
    element matching each selector is considered.
    """

    def __init__(
        self,
        name: str,
        selectors: Sequence[str],
        min_length: int = 0,
        max_length: Optional[int] = None,
        cap: Optional[int] = None,
        separator: str = ' '
    ):
        self.name = name
        self.selectors = list(selectors)
        self.min_length = min_length
        self.max_length = max_length
        self.cap = cap
        self.separator = separator

    def accepts(self, text: str) -> bool:
        if not text or len(text) <= self.min_length:
            return False
        if self.max_length is not None and len(text) >= self.max_length:
            return False
        return True

    def extract(self, root) -> Optional[str]:
        """Return the first text that passes the gate, or None."""
        if root is None:
            return None
        for selector in self.selectors:
            element = root.select_one(selector)
            if element is None:
                continue
            text = element_text(element, self.separator)
            if self.accepts(text):
                logger.debug(f"[field_extractors] {self.name} matched {selector!r}")
                return text[:self.cap] if self.cap else text
        return None

    def __repr__(self):
        return f"<FieldStrategy(name={self.name}, selectors={len(self.selectors)})>"


def extract_fields(root, strategies: Iterable[FieldStrategy]) -> Dict[str, str]:
    """Run each strategy, returning '' for fields that found nothing."""
    return {strategy.name: strategy.extract(root) or '' for strategy in strategies}


def first_element(root, selectors: Sequence[str]) -> Optional[Tag]:
    for selector in selectors:
        element = root.select_one(selector)
        if element is not None:
            return element
    return None

