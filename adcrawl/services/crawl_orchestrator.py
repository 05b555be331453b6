import logging
from typing import Optional

from adcrawl.domain.crawl_request import CrawlRequest
from adcrawl.domain.crawl_result import CrawlResult
from adcrawl.domain.crawl_state import CrawlPhase, CrawlState
from adcrawl.services.browser_session import BrowserPage, BrowserSession
from adcrawl.services.error_classifier import ErrorClassifier
from adcrawl.services.listing_extractor import ListingExtractor

logger = logging.getLogger(__name__)


class CrawlOrchestrator:
    """Executes one crawl of a paginated search-results listing.

    This class owns the crawl control-flow (pagination, per-listing
    navigation, the boundary stop and failure handling). It does NOT
    construct its collaborators (that stays in the DI layer).

    Steps within a crawl are strictly sequential on a single page. Any
    exception aborts the crawl: the records collected so far are dropped
    and one classified `Failure` is returned instead. Nothing is retried.
    """

    def __init__(
        self,
        *,
        session: BrowserSession,
        extractor: ListingExtractor,
        error_classifier: ErrorClassifier,
    ):
        self.session = session
        self.extractor = extractor
        self.error_classifier = error_classifier

    async def crawl(self, request: CrawlRequest) -> CrawlResult:
        if request is None:
            raise ValueError("request is required for crawl")

        state = CrawlState(request.url)
        page: Optional[BrowserPage] = None
        try:
            page = await self.session.acquire_page(request.url)
            logger.info("Navigating to %s", request.url)
            await page.navigate(request.url)
            await self._run(page, request, state)
            state.enter(CrawlPhase.DONE)
            await page.close()
            page = None
        except Exception as e:
            failed_in = state.phase
            state.enter(CrawlPhase.FAILED)
            failure = self.error_classifier.classify(e, state.current_url)
            logger.error("Crawl of %s failed while %s: %s", request.url, failed_in.value, failure.message)
            if page is not None:
                await self._discard(page)
            return CrawlResult.failed(failure)

        if state.boundary_hit:
            logger.info("Crawl of %s stopped at boundary %s with %d listings", request.url, request.until, len(state.records))
        else:
            logger.info("Crawl of %s finished with %d listings", request.url, len(state.records))
        return CrawlResult.succeeded(state.records)

    async def _run(self, page: BrowserPage, request: CrawlRequest, state: CrawlState) -> None:
        while True:
            state.enter(CrawlPhase.FETCHING_PAGE)
            html = await page.content()

            state.enter(CrawlPhase.EXTRACTING_LINKS)
            results = self.extractor.extract_search_page(state.current_url, html)
            logger.info("Found %d listing urls on %s", len(results.listing_urls), state.current_url)

            state.enter(CrawlPhase.VISITING_LISTING)
            for listing_url in results.listing_urls:
                if request.is_boundary(listing_url):
                    logger.info("Found boundary listing %s, stopping", listing_url)
                    state.boundary_hit = True
                    return
                await self._visit_listing(page, listing_url, state)

            if results.next_page is None:
                return

            next_url = self.extractor.absolute_url(results.next_page)
            state.enter(CrawlPhase.PAGINATING, next_url)
            logger.info("Going to next page: %s", next_url)
            await page.navigate(next_url)

    async def _visit_listing(self, page: BrowserPage, listing_url: str, state: CrawlState) -> None:
        state.current_url = listing_url
        logger.info("Fetching listing: %s", listing_url)
        await page.navigate(listing_url)
        html = await page.content()
        logger.info("Fetched listing: %s", listing_url)
        state.append(self.extractor.extract_article(listing_url, html))

    async def _discard(self, page: BrowserPage) -> None:
        try:
            await page.close()
        except Exception as e:
            logger.warning("Could not close page after failed crawl: %s", e)
