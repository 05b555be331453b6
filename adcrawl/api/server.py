from contextlib import asynccontextmanager

from fastapi import FastAPI

from adcrawl.api.routers import create_scrape_router, create_systems_router
from adcrawl.container import Container


def create_app(container: Container) -> FastAPI:
    """Return the FastAPI app serving crawl requests.

    The shared browser session is started before the first request is
    served and stopped once when the app shuts down.
    """
    browser_session = container.browser_session()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await browser_session.start()
        try:
            yield
        finally:
            await browser_session.stop()

    app = FastAPI(title="adcrawl", lifespan=lifespan)
    app.state.container = container
    app.include_router(create_scrape_router(container.crawl_orchestrator))
    app.include_router(create_systems_router(container.config(), browser_session))
    return app
