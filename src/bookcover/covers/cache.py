# ABOUTME: Filesystem cover cache keyed by ISBN or hashed alternative key.
# ABOUTME: Probes <base>/covers/<key>.jpg so reruns pick up their own earlier downloads.

import hashlib
import logging
from pathlib import Path

from bookcover.config import COVERS_DIRNAME, DEFAULT_COVER
from bookcover.document.types import BookEntry

logger = logging.getLogger(__name__)

COVER_SUFFIX = ".jpg"


def hash_key(value: str) -> str:
    """SHA-256 hex digest of value (64 lowercase hex characters)."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def cache_key(entry: BookEntry) -> str | None:
    """Deterministic cache key for an entry.

    The ISBN is used verbatim; an alternative key is hashed. Returns None
    when the entry has neither.
    """
    if entry.isbn:
        return entry.isbn
    if entry.alternative_key:
        return hash_key(entry.alternative_key)
    return None


class CoverCache:
    """The covers directory under a base path."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path

    @property
    def covers_dir(self) -> Path:
        return self.base_path / COVERS_DIRNAME

    @property
    def default_file(self) -> Path:
        return self.base_path / DEFAULT_COVER

    def path_for(self, key: str) -> Path:
        return self.covers_dir / f"{key}{COVER_SUFFIX}"

    def relative_path(self, key: str) -> str:
        """The cover path as written into markup, relative to the base path."""
        return f"{COVERS_DIRNAME}/{key}{COVER_SUFFIX}"

    def default_exists(self) -> bool:
        return self.default_file.is_file()

    def find(self, entry: BookEntry) -> str | None:
        """Relative path of the entry's cached cover, or None when absent."""
        key = cache_key(entry)
        if key is None:
            return None
        if self.path_for(key).is_file():
            return self.relative_path(key)
        return None


def apply_cached_covers(entries: list[BookEntry], cache: CoverCache) -> int:
    """Set cover_path on every unresolved entry with a cached cover.

    MUTATES entries in place. Never creates files.

    Returns:
        Number of entries resolved from the cache.
    """
    hits = 0
    for entry in entries:
        if entry.is_resolved:
            continue
        cached = cache.find(entry)
        if cached is not None:
            entry.cover_path = cached
            hits += 1
    logger.debug("Cache hits: %d of %d entries", hits, len(entries))
    return hits
