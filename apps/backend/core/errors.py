"""
Crawler error taxonomy.

Bot-protection is not an exception: it is reported as ``blocked=True`` on the
result objects. Everything here is caught at the JobCrawler boundary.
"""


class CrawlerError(Exception):
    """Base class for crawler failures."""
    pass


class LaunchFailure(CrawlerError):
    """Raised when the headless browser process could not be started."""
    pass


class NavigationTimeout(CrawlerError):
    """Raised when a page does not reach the requested readiness state in time."""

    def __init__(self, url: str, timeout_ms: int):
        self.url = url
        self.timeout_ms = timeout_ms
        super().__init__(f"Navigation to {url} timed out after {timeout_ms}ms")


class ExtractionEmpty(CrawlerError):
    """Raised when no usable content could be recovered from a page."""
    pass


class MalformedInput(CrawlerError):
    """Raised for invalid URLs or missing required fields, before any browser work."""
    pass
