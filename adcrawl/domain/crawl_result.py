"""Crawl result data model."""
from typing import NamedTuple, Optional

from adcrawl.domain.failure import Failure
from adcrawl.domain.listing import ListingRecord


class CrawlResult(NamedTuple):
    """Outcome of one orchestrated crawl.

    Either every record gathered (in encounter order) or a single failure,
    never both: a failed crawl carries no records.
    """
    records: tuple[ListingRecord, ...] = ()
    """Records in encounter order; empty when the crawl failed"""

    failure: Optional[Failure] = None
    """Set when the crawl aborted"""

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def succeeded(cls, records) -> "CrawlResult":
        return cls(records=tuple(records), failure=None)

    @classmethod
    def failed(cls, failure: Failure) -> "CrawlResult":
        return cls(records=(), failure=failure)
