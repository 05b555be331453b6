"""Dependency injection container for the application."""
from dependency_injector import containers, providers

from adcrawl.services.browser_session import BrowserSession, PlaywrightBrowserOptions
from adcrawl.services.crawl_orchestrator import CrawlOrchestrator
from adcrawl.services.error_classifier import ErrorClassifier
from adcrawl.services.listing_extractor import ListingExtractor
from adcrawl import config as env


# Environment variables used by the container (read via `adcrawl.config` helpers).
#
# SITE_ORIGIN (str, default: "https://www.ebay-kleinanzeigen.de")
#   Origin that listing links and next-page links are resolved against.
#
# USER_AGENT (str | optional)
#   User-Agent for crawl tabs. Chromium's own default when unset.
#
# BROWSER_HEADLESS (bool, default: true)
#   Launch Chromium without a window.
#
# BROWSER_EXECUTABLE_PATH (str | optional)
#   Use this Chromium binary instead of Playwright's bundled one.
#
# NAVIGATION_WAIT_UNTIL (str, default: "load")
#   Load state awaited by every navigation (domcontentloaded | load | networkidle | commit).
#
# NAVIGATION_TIMEOUT_MS (int milliseconds, default: 0)
#   Per-navigation timeout. 0 means wait for the browser indefinitely.
#
# HOST / PORT (str / int, default: "0.0.0.0" / 8000)
#   Address the HTTP server binds to.
#
# LOG_LEVEL (str, default: "INFO")
ENV = {
    "SITE_ORIGIN": env.get_str_env("SITE_ORIGIN", "https://www.ebay-kleinanzeigen.de"),
    "USER_AGENT": env.get_optional_str_env("USER_AGENT"),
    "BROWSER_HEADLESS": env.get_bool_env("BROWSER_HEADLESS", True),
    "BROWSER_EXECUTABLE_PATH": env.get_optional_str_env("BROWSER_EXECUTABLE_PATH"),
    "NAVIGATION_WAIT_UNTIL": env.get_str_env("NAVIGATION_WAIT_UNTIL", "load").strip().lower(),
    "NAVIGATION_TIMEOUT_MS": env.get_int_env("NAVIGATION_TIMEOUT_MS", 0),
    "HOST": env.get_str_env("HOST", "0.0.0.0"),
    "PORT": env.get_int_env("PORT", 8000),
    "LOG_LEVEL": env.get_str_env("LOG_LEVEL", "INFO"),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for the adcrawl service."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # Shared browser connection - one per process, handed to every crawl by reference
    browser_session = providers.Singleton(
        BrowserSession,
        options=providers.Factory(
            PlaywrightBrowserOptions,
            headless=config.BROWSER_HEADLESS.as_(bool),
            executable_path=config.BROWSER_EXECUTABLE_PATH,
            user_agent=config.USER_AGENT,
            timeout_ms=config.NAVIGATION_TIMEOUT_MS.as_(int),
            wait_until=config.NAVIGATION_WAIT_UNTIL.as_(str),
        ),
    )

    listing_extractor = providers.Singleton(
        ListingExtractor,
        site_origin=config.SITE_ORIGIN.as_(str),
    )

    error_classifier = providers.Singleton(
        ErrorClassifier
    )

    # One orchestrator per crawl request
    crawl_orchestrator = providers.Factory(
        CrawlOrchestrator,
        session=browser_session,
        extractor=listing_extractor,
        error_classifier=error_classifier,
    )
