# ABOUTME: Per-document cover pipeline: load, extract, resolve, rewrite, write.
# ABOUTME: The parsed tree is passed explicitly from stage to stage.

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from bookcover.covers.cache import CoverCache, apply_cached_covers
from bookcover.covers.resolver import CoverResolver, ResolveResult, ResolveStatus
from bookcover.document.extractor import extract_entries
from bookcover.document.loader import load_document, parse_document
from bookcover.document.markup import build_markup
from bookcover.document.writer import write_document

logger = logging.getLogger(__name__)


@dataclass
class DocumentResult:
    """Result of processing one document."""

    source: Path
    output: Path
    results: list[ResolveResult] = field(default_factory=list)

    def count(self, status: ResolveStatus) -> int:
        return sum(1 for result in self.results if result.status is status)

    @property
    def failures(self) -> list[ResolveResult]:
        return [result for result in self.results if not result.ok]


def process_document(
    path: Path,
    *,
    resolver: CoverResolver,
    cache: CoverCache,
    output: Path | None = None,
    stylesheet: str | None = None,
    on_entries: Callable[[int], None] | None = None,
    on_result: Callable[[ResolveResult], None] | None = None,
) -> DocumentResult:
    """Run the full pipeline for a single document.

    Args:
        path: Source document.
        resolver: Resolver for entries the cache does not cover.
        cache: Covers cache under the base path.
        output: Destination path (default: overwrite the source).
        stylesheet: CSS to inject into <head>, if any.
        on_entries: Called with the number of entries once extracted.
        on_result: Called as each entry's cover settles.

    Returns:
        DocumentResult with one ResolveResult per entry, in document order.

    Raises:
        DocumentLoadError: If the source cannot be read.
        MarkupError: If an entry cannot be matched back to its node.
    """
    destination = output or path
    soup = parse_document(load_document(path))

    entries = extract_entries(soup)
    logger.info("Found %d entries in %s", len(entries), path)
    if on_entries is not None:
        on_entries(len(entries))

    apply_cached_covers(entries, cache)
    results = resolver.resolve_all(entries, on_result=on_result)

    soup = build_markup(soup, entries)
    write_document(soup, destination, stylesheet=stylesheet)
    return DocumentResult(source=path, output=destination, results=results)
