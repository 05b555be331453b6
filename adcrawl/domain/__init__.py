"""Domain objects for adcrawl - explicit re-exports to satisfy linters."""
from .crawl_request import CrawlRequest as CrawlRequest
from .listing import ListingRecord as ListingRecord
from .search_page import SearchResultsPage as SearchResultsPage
from .crawl_state import CrawlPhase as CrawlPhase, CrawlState as CrawlState
from .failure import Failure as Failure, FailureKind as FailureKind
from .crawl_result import CrawlResult as CrawlResult

__all__ = [
    "CrawlRequest",
    "ListingRecord",
    "SearchResultsPage",
    "CrawlPhase",
    "CrawlState",
    "Failure",
    "FailureKind",
    "CrawlResult",
]
