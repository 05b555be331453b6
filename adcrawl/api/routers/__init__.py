"""API router factory functions."""
from .scrape import create_scrape_router
from .systems import create_systems_router

__all__ = [
    "create_scrape_router",
    "create_systems_router",
]
