import logging
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from adcrawl.domain.listing import ListingRecord
from adcrawl.domain.search_page import SearchResultsPage
from adcrawl.exceptions import ParseFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingSelectors:
    """CSS selectors for the classifieds site's result and article pages."""

    listing_link: str = "a.ellipsis"
    next_page: str = "a.pagination-next"
    title: str = "h1.boxedarticle--title"
    price: str = "h2#viewad-price"
    location: str = "span#viewad-locality"
    description: str = "p#viewad-description-text"
    detail: str = "li.addetailslist--detail"
    image: str = "div.galleryimage-element img#viewad-image"


class ListingExtractor:
    """Stateless extraction of search-result links and article fields.

    Both modes are pure functions of the document text: the same HTML always
    yields the same output.

    Required article fields (title, price, location, description) must match
    exactly one element and yield text, otherwise a `ParseFailure` naming the
    field and article URL is raised. Images and detail rows are optional.
    """

    def __init__(
        self,
        site_origin: str,
        selectors: Optional[ListingSelectors] = None,
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
    ):
        if not site_origin:
            raise ValueError("site_origin is required")
        self._site_origin = site_origin
        self._selectors = selectors or ListingSelectors()
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    @property
    def site_origin(self) -> str:
        return self._site_origin

    def absolute_url(self, href: str) -> str:
        return urljoin(self._site_origin, href)

    def extract_search_page(self, page_url: str, html: str) -> SearchResultsPage:
        soup = self._parse(page_url, html, "search results")

        listing_urls = tuple(
            self.absolute_url(a.get("href"))
            for a in soup.select(self._selectors.listing_link)
            if a.get("href") is not None
        )

        next_page = None
        anchor = soup.select_one(self._selectors.next_page)
        if anchor is not None:
            next_page = anchor.get("href")

        return SearchResultsPage(listing_urls=listing_urls, next_page=next_page)

    def extract_article(self, article_url: str, html: str) -> ListingRecord:
        soup = self._parse(article_url, html, "article")
        sel = self._selectors

        title = self._text_child(soup, article_url, "title", sel.title, last=True)
        price = self._text_child(soup, article_url, "price", sel.price)
        location = self._text_child(soup, article_url, "location", sel.location)
        description = self._required(soup, article_url, "description", sel.description).get_text().strip()

        return ListingRecord(
            url=article_url,
            title=title,
            location=location,
            price=price,
            description=description,
            details=self._details(soup, article_url),
            images=self._images(soup),
        )

    def _parse(self, url: str, html: str, field: str) -> BeautifulSoup:
        if html is None:
            raise ParseFailure(url, field, "empty document")
        try:
            return self._soup_factory(html)
        except Exception as e:
            raise ParseFailure(url, field, f"unparseable document ({e})") from e

    def _required(self, soup: BeautifulSoup, url: str, field: str, selector: str) -> Tag:
        matches = soup.select(selector)
        if len(matches) != 1:
            raise ParseFailure(
                url, field, f"expected exactly one element matching {selector!r}, found {len(matches)}"
            )
        return matches[0]

    def _text_child(self, soup: BeautifulSoup, url: str, field: str, selector: str, last: bool = False) -> str:
        element = self._required(soup, url, field, selector)
        if not element.contents:
            raise ParseFailure(url, field, "element has no content")
        node = element.contents[-1] if last else element.contents[0]
        if not isinstance(node, NavigableString) or isinstance(node, Comment):
            raise ParseFailure(url, field, "element has no text content")
        return str(node).strip()

    def _images(self, soup: BeautifulSoup) -> list[str]:
        return [img.get("src") for img in soup.select(self._selectors.image) if img.get("src") is not None]

    def _details(self, soup: BeautifulSoup, url: str) -> dict[str, str]:
        details: dict[str, str] = {}
        for row in soup.select(self._selectors.detail):
            fragments = list(row.strings)
            if len(fragments) < 2:
                logger.debug("Skipping detail row with %d text fragment(s) on %s", len(fragments), url)
                continue
            details[fragments[0].strip()] = fragments[1].strip()
        return details
