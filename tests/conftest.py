# ABOUTME: Shared pytest fixtures for bookcover tests.
# ABOUTME: Provides a site directory with a reading list and covers cache, plus resolver wiring.

from pathlib import Path

import pytest

from bookcover.covers.cache import CoverCache
from bookcover.covers.lookup import CoverLookup
from bookcover.covers.resolver import CoverResolver
from bookcover.covers.transform import CoverTransformer
from tests.fixtures.cover_responses import (
    AMAZON_PAGE_NO_IMAGE,
    GOOGLE_EMPTY,
    OPENLIBRARY_MEDIUM_ONLY,
    READING_LIST,
)
from tests.fixtures.fakes import FakeHttpClient, FakeRunner


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A base directory holding covers/default.jpg and the reading list.

    Layout:
        site/
            Recently_ReadDatabase.html
            covers/
                default.jpg
    """
    root = tmp_path / "site"
    covers = root / "covers"
    covers.mkdir(parents=True)
    (covers / "default.jpg").write_bytes(b"JPEG:default")
    (root / "Recently_ReadDatabase.html").write_text(READING_LIST, encoding="utf-8")
    return root


@pytest.fixture
def reading_list(site: Path) -> Path:
    return site / "Recently_ReadDatabase.html"


@pytest.fixture
def cache(site: Path) -> CoverCache:
    return CoverCache(site)


@pytest.fixture
def fake_http() -> FakeHttpClient:
    """Lookup yields only an Open Library medium candidate for any ISBN."""
    return FakeHttpClient(
        json_responses={
            "openlibrary.org": OPENLIBRARY_MEDIUM_ONLY,
            "googleapis.com": GOOGLE_EMPTY,
        },
        text_responses={"amazon.com": AMAZON_PAGE_NO_IMAGE},
    )


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def resolver(
    cache: CoverCache, fake_http: FakeHttpClient, fake_runner: FakeRunner
) -> CoverResolver:
    return CoverResolver(
        cache=cache,
        lookup=CoverLookup(fake_http),
        http_client=fake_http,
        transformer=CoverTransformer(runner=fake_runner),
        workers=4,
    )
