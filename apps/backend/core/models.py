"""
Job data model shared by the crawler and the HTTP layer.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class JobSource(str, Enum):
    """Provenance tag stamped on every record at creation."""
    AWIGN = "awign"
    INDEED = "indeed"
    MANUAL = "manual"


class FailureReason(str, Enum):
    """Why a single-URL fetch ended with blocked=True (diagnostics only)."""
    BOT_PROTECTION = "bot_protection"
    INSUFFICIENT_CONTENT = "insufficient_content"
    NAVIGATION_TIMEOUT = "navigation_timeout"
    LAUNCH_FAILURE = "launch_failure"
    ERROR = "error"


class JobRecord(BaseModel):
    id: str
    title: str
    company: str
    location: str
    description: str
    url: str = ""
    source: JobSource


class CrawlResult(BaseModel):
    """
    Result of a board search.

    ``error`` is a warning when ``jobs`` is non-empty and fatal otherwise.
    """
    jobs: List[JobRecord] = []
    error: Optional[str] = None
    blocked: bool = False

    def is_success(self) -> bool:
        return len(self.jobs) > 0


class SingleJobResult(BaseModel):
    success: bool
    job: Optional[JobRecord] = None
    error: Optional[str] = None
    blocked: bool = False
    reason: Optional[FailureReason] = None


class JobStub:
    """Partially populated listing record, pending description enrichment"""

    def __init__(
        self,
        title: str,
        url: str = "",
        company: Optional[str] = None,
        location: Optional[str] = None,
        snippet: str = "",
        description: Optional[str] = None
    ):
        self.title = title
        self.url = url
        self.company = company
        self.location = location
        self.snippet = snippet
        self.description = description

    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'url': self.url,
            'company': self.company,
            'location': self.location,
            'description': self.description,
        }

    def __repr__(self):
        return f"JobStub(title={self.title[:40]!r}, url={self.url[:60]!r})"
