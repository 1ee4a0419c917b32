# ABOUTME: Cover candidate record and the fixed source-quality ranking.
# ABOUTME: One optional URL field per known cover source, ranked best-first.

from dataclasses import dataclass, fields
from enum import Enum


@dataclass
class CoverCandidates:
    """Candidate cover URLs for one ISBN, at most one per source."""

    openlibrary_large: str | None = None
    openlibrary_medium: str | None = None
    openlibrary_small: str | None = None
    amazon_2x: str | None = None
    amazon_1_5x: str | None = None
    amazon_1x: str | None = None
    google_thumbnail: str | None = None
    google_small_thumbnail: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def merge(self, other: "CoverCandidates") -> "CoverCandidates":
        """Return a copy with every field other sets filled in from other."""
        merged = CoverCandidates(**{f.name: getattr(self, f.name) for f in fields(self)})
        for f in fields(other):
            value = getattr(other, f.name)
            if value is not None:
                setattr(merged, f.name, value)
        return merged


class CoverSource(Enum):
    """Known cover sources, valued by their CoverCandidates field."""

    OPENLIBRARY_LARGE = "openlibrary_large"
    AMAZON_2X = "amazon_2x"
    AMAZON_1_5X = "amazon_1_5x"
    OPENLIBRARY_MEDIUM = "openlibrary_medium"
    AMAZON_1X = "amazon_1x"
    GOOGLE_THUMBNAIL = "google_thumbnail"
    GOOGLE_SMALL_THUMBNAIL = "google_small_thumbnail"
    OPENLIBRARY_SMALL = "openlibrary_small"

    def url_from(self, candidates: CoverCandidates) -> str | None:
        return getattr(candidates, self.value)


# Highest quality first.
PREFERENCE_ORDER: tuple[CoverSource, ...] = (
    CoverSource.OPENLIBRARY_LARGE,
    CoverSource.AMAZON_2X,
    CoverSource.AMAZON_1_5X,
    CoverSource.OPENLIBRARY_MEDIUM,
    CoverSource.AMAZON_1X,
    CoverSource.GOOGLE_THUMBNAIL,
    CoverSource.GOOGLE_SMALL_THUMBNAIL,
    CoverSource.OPENLIBRARY_SMALL,
)


def pick_best(candidates: CoverCandidates) -> tuple[CoverSource, str] | None:
    """Pick the highest-ranked candidate present, or None if there is none."""
    for source in PREFERENCE_ORDER:
        url = source.url_from(candidates)
        if url:
            return source, url
    return None
