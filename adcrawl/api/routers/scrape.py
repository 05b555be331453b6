import logging
from typing import Callable, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from adcrawl.domain.crawl_request import CrawlRequest

logger = logging.getLogger(__name__)


class ScrapeRequest(BaseModel):
    url: str
    # Scrape listings until this listing url is seen (excluding it)
    until: Optional[str] = None


class ListingResponse(BaseModel):
    url: str
    title: str
    location: str
    price: str
    description: str
    details: dict[str, str]
    images: list[str]


def create_scrape_router(orchestrator_factory: Callable):
    """Create the crawl endpoint.

    `orchestrator_factory()` must return a fresh `CrawlOrchestrator` per request.
    """
    router = APIRouter(tags=["Scrape"])

    @router.post("/", response_model=list[ListingResponse])
    async def scrape(req: ScrapeRequest):
        try:
            request = CrawlRequest(url=req.url, until=req.until)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        logger.info("Scrape requested for %s (until=%s)", request.url, request.until)
        result = await orchestrator_factory().crawl(request)
        if not result.ok:
            raise HTTPException(status_code=500, detail=result.failure.message)
        return [record.to_dict() for record in result.records]

    return router
