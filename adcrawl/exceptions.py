"""Custom exceptions for adcrawl services."""
from typing import Optional


class CrawlError(Exception):
    """Base class for failures that abort a crawl."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(message)


class NavigationFailure(CrawlError):
    """Raised when the browser cannot navigate to or render a page."""

    def __init__(self, url: str, original: Exception):
        self.original = original
        super().__init__(url, f"navigation failed for {url}: {original}")


class ParseFailure(CrawlError):
    """Raised when a fetched document does not match the expected selectors."""

    def __init__(self, url: str, field: Optional[str] = None, reason: str = "not found"):
        self.field = field
        self.reason = reason
        what = f"'{field}' of {url}" if field else url
        super().__init__(url, f"could not parse {what}: {reason}")
