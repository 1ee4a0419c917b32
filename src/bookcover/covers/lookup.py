# ABOUTME: Multi-source cover lookup by ISBN (Open Library, Amazon, Google Books).
# ABOUTME: Collects at most one candidate URL per source into a CoverCandidates record.

import json
import logging
from collections.abc import Callable
from typing import Any

from bs4 import BeautifulSoup

from bookcover.covers.http import CoverFetchError, HttpClient
from bookcover.covers.isbn import isbn13_to_isbn10, normalize_isbn
from bookcover.covers.sources import CoverCandidates

logger = logging.getLogger(__name__)

_OL_BOOKS_API = "https://openlibrary.org/api/books"
_AMAZON_PRODUCT = "https://www.amazon.com/dp/{isbn10}"
_GOOGLE_VOLUMES_API = "https://www.googleapis.com/books/v1/volumes"

# Front-cover image elements on Amazon product pages, in lookup order.
_AMAZON_IMAGE_SELECTOR = "#imgBlkFront, #ebooksImgBlkFront, #landingImage"
_AMAZON_SCALES = ("amazon_1x", "amazon_1_5x", "amazon_2x")


def parse_openlibrary_response(data: dict[str, Any], isbn: str) -> CoverCandidates:
    """Read cover URLs from an Open Library books API (jscmd=data) response."""
    record = data.get(f"ISBN:{isbn}")
    if not isinstance(record, dict):
        return CoverCandidates()
    cover = record.get("cover") or {}
    return CoverCandidates(
        openlibrary_large=cover.get("large"),
        openlibrary_medium=cover.get("medium"),
        openlibrary_small=cover.get("small"),
    )


def parse_google_response(data: dict[str, Any]) -> CoverCandidates:
    """Read thumbnail URLs from the first Google Books volume."""
    items = data.get("items")
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return CoverCandidates()
    links = items[0].get("volumeInfo", {}).get("imageLinks") or {}
    return CoverCandidates(
        google_thumbnail=links.get("thumbnail"),
        google_small_thumbnail=links.get("smallThumbnail"),
    )


def parse_amazon_page(html: str) -> CoverCandidates:
    """Read scaled cover images from an Amazon product page.

    The front-cover element carries a ``data-a-dynamic-image`` JSON map of
    url -> [width, height]. Images are ordered by width and assigned to the
    1x, 1.5x and 2x scales from smallest up.
    """
    soup = BeautifulSoup(html, "html.parser")
    image = soup.select_one(_AMAZON_IMAGE_SELECTOR)
    if image is None:
        return CoverCandidates()
    raw = image.get("data-a-dynamic-image")
    if not raw:
        return CoverCandidates()
    try:
        sizes = json.loads(str(raw))
    except ValueError:
        logger.debug("Unparseable Amazon image map: %s", raw)
        return CoverCandidates()

    by_width = sorted(sizes.items(), key=lambda item: item[1][0] if item[1] else 0)
    scaled = {
        scale: url for scale, (url, _size) in zip(_AMAZON_SCALES, by_width)
    }
    return CoverCandidates(**scaled)


class CoverLookup:
    """Queries every known cover source for an ISBN.

    A source that fails is logged and treated as having no candidate, so a
    lookup only ever comes back empty, never raises.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    def search(self, isbn: str) -> CoverCandidates:
        clean = normalize_isbn(isbn)
        candidates = CoverCandidates()
        sources: list[tuple[str, Callable[[str], CoverCandidates]]] = [
            ("openlibrary", self._search_openlibrary),
            ("amazon", self._search_amazon),
            ("google", self._search_google),
        ]
        for name, search in sources:
            try:
                candidates = candidates.merge(search(clean))
            except CoverFetchError as exc:
                logger.warning("Cover lookup via %s failed for %s: %s", name, isbn, exc)
            except (AttributeError, TypeError, IndexError, KeyError, ValueError) as exc:
                logger.warning("Malformed %s response for %s: %s", name, isbn, exc)
        if candidates.is_empty:
            logger.info("No cover candidates for %s", isbn)
        return candidates

    def _search_openlibrary(self, isbn: str) -> CoverCandidates:
        data = self._http.get(
            _OL_BOOKS_API,
            params={"bibkeys": f"ISBN:{isbn}", "format": "json", "jscmd": "data"},
        )
        return parse_openlibrary_response(data, isbn)

    def _search_amazon(self, isbn: str) -> CoverCandidates:
        isbn10 = isbn13_to_isbn10(isbn)
        if isbn10 is None:
            return CoverCandidates()
        html = self._http.get_text(_AMAZON_PRODUCT.format(isbn10=isbn10))
        return parse_amazon_page(html)

    def _search_google(self, isbn: str) -> CoverCandidates:
        data = self._http.get(_GOOGLE_VOLUMES_API, params={"q": f"isbn:{isbn}"})
        return parse_google_response(data)
