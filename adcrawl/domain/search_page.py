from typing import NamedTuple, Optional


class SearchResultsPage(NamedTuple):
    """Links found on one page of search results."""
    listing_urls: tuple[str, ...]
    """Absolute listing URLs in document order"""

    next_page: Optional[str] = None
    """Raw link target of the next-page anchor, None on the last page"""
