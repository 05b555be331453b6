from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CrawlRequest:
    """One crawl of a search-results listing.

    `until` names a listing URL at which the crawl stops; that listing and
    everything after it are excluded from the output.
    """

    url: str
    until: Optional[str] = None

    def __post_init__(self):
        if self.url is None or (isinstance(self.url, str) and self.url.strip() == ""):
            raise ValueError("url is required")

    def is_boundary(self, listing_url: str) -> bool:
        # Exact string match: no normalization of scheme, case or trailing slash.
        return self.until is not None and self.until == listing_url
