# ABOUTME: Resolves a cover for every entry the cache check left unresolved.
# ABOUTME: Runs lookup, ranking, download, and normalization per entry on a bounded thread pool.

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum

from bookcover.config import DEFAULT_COVER, DEFAULT_WORKERS
from bookcover.covers.cache import CoverCache, cache_key
from bookcover.covers.http import CoverFetchError, HttpClient
from bookcover.covers.lookup import CoverLookup
from bookcover.covers.sources import pick_best
from bookcover.covers.transform import CoverTransformer, TransformError
from bookcover.document.types import BookEntry

logger = logging.getLogger(__name__)


class ResolveStatus(Enum):
    CACHED = "cached"
    DOWNLOADED = "downloaded"
    UNNORMALIZED = "unnormalized"
    DEFAULT = "default"
    FAILED = "failed"


@dataclass
class ResolveResult:
    """Outcome of resolving one entry's cover."""

    entry: BookEntry
    status: ResolveStatus
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not ResolveStatus.FAILED


class CoverResolver:
    """Turns unresolved entries into entries with a final cover_path.

    Collaborators are injected: the lookup for ISBN searches, the HTTP
    client for downloads, and the transformer for normalization.
    """

    def __init__(
        self,
        *,
        cache: CoverCache,
        lookup: CoverLookup,
        http_client: HttpClient,
        transformer: CoverTransformer,
        workers: int = DEFAULT_WORKERS,
    ) -> None:
        self._cache = cache
        self._lookup = lookup
        self._http = http_client
        self._transformer = transformer
        self._workers = workers

    def resolve_entry(self, entry: BookEntry) -> ResolveResult:
        """Resolve a single entry's cover.

        MUTATES entry.cover_path unless it is already set. Lookup, download,
        and transform failures are contained here and reported in the result.
        """
        if entry.is_resolved:
            return ResolveResult(entry, ResolveStatus.CACHED)

        key = cache_key(entry)
        if key is None:
            entry.cover_path = DEFAULT_COVER
            return ResolveResult(entry, ResolveStatus.DEFAULT)

        url = self._choose_url(entry)
        if url is None:
            entry.cover_path = DEFAULT_COVER
            return ResolveResult(entry, ResolveStatus.DEFAULT)

        dest = self._cache.path_for(key)
        try:
            self._http.download(url, dest)
        except CoverFetchError as exc:
            logger.warning("Download failed for %s: %s", entry.identifier, exc)
            entry.cover_path = DEFAULT_COVER
            return ResolveResult(entry, ResolveStatus.FAILED, error=str(exc))

        # The downloaded file is kept as the cover even if normalizing fails.
        entry.cover_path = self._cache.relative_path(key)
        try:
            self._transformer.normalize(dest)
        except TransformError as exc:
            logger.warning("Keeping unnormalized cover %s: %s", dest, exc)
            return ResolveResult(entry, ResolveStatus.UNNORMALIZED, error=str(exc))

        logger.info("Cover for %s saved to %s", entry.identifier, entry.cover_path)
        return ResolveResult(entry, ResolveStatus.DOWNLOADED)

    def resolve_all(
        self,
        entries: list[BookEntry],
        on_result: Callable[[ResolveResult], None] | None = None,
    ) -> list[ResolveResult]:
        """Resolve every entry concurrently and wait for all of them.

        Results are returned in the order of entries, whatever order the
        workers finish in. on_result, if given, is called from the calling
        thread as each entry settles.
        """
        results: list[ResolveResult | None] = [None] * len(entries)
        pending: dict[Future, int] = {}

        with ThreadPoolExecutor(max_workers=self._workers) as executor:
            for index, entry in enumerate(entries):
                if entry.is_resolved:
                    results[index] = ResolveResult(entry, ResolveStatus.CACHED)
                    if on_result is not None:
                        on_result(results[index])
                    continue
                pending[executor.submit(self.resolve_entry, entry)] = index

            for future in as_completed(pending):
                index = pending[future]
                try:
                    result = future.result()
                except Exception as exc:
                    result = self._failed(entries[index], exc)
                results[index] = result
                if on_result is not None:
                    on_result(result)

        return [result for result in results if result is not None]

    def _failed(self, entry: BookEntry, exc: Exception) -> ResolveResult:
        """Settle an entry whose worker raised something unexpected."""
        logger.error("Resolving %s failed: %s", entry.identifier, exc, exc_info=exc)
        if not entry.is_resolved:
            entry.cover_path = DEFAULT_COVER
        return ResolveResult(entry, ResolveStatus.FAILED, error=str(exc))

    def _choose_url(self, entry: BookEntry) -> str | None:
        """Best lookup candidate for the ISBN, else the alternative key URL."""
        if entry.isbn:
            best = pick_best(self._lookup.search(entry.isbn))
            if best is not None:
                source, url = best
                logger.debug("Picked %s cover for %s", source.value, entry.isbn)
                return url
        if entry.alternative_key:
            return entry.alternative_key
        return None
