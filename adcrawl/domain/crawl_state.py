from enum import Enum
from typing import List

from adcrawl.domain.listing import ListingRecord


class CrawlPhase(str, Enum):
    START = "start"
    FETCHING_PAGE = "fetching_page"
    EXTRACTING_LINKS = "extracting_links"
    VISITING_LISTING = "visiting_listing"
    PAGINATING = "paginating"
    DONE = "done"
    FAILED = "failed"


class CrawlState:
    """Mutable state of a single crawl. Never shared between crawls."""

    def __init__(self, url: str):
        self.current_url = url
        self.phase = CrawlPhase.START
        self.records: List[ListingRecord] = []
        self.boundary_hit = False

    def enter(self, phase: CrawlPhase, url: str = None):
        self.phase = phase
        if url is not None:
            self.current_url = url

    def append(self, record: ListingRecord):
        self.records.append(record)
