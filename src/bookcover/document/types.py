# ABOUTME: The BookEntry record extracted from a reading-list document.
# ABOUTME: Carries lookup keys, tooltip markup, and the resolved cover path.

from dataclasses import dataclass


@dataclass
class BookEntry:
    """A single book entry found in a reading-list document.

    Either ``isbn`` or ``alternative_key`` drives cover resolution. The
    ``cover_path`` stays empty until the cache check or the resolver sets
    it, and is never overwritten afterwards.
    """

    identifier: str
    isbn: str = ""
    alternative_key: str = ""
    title: str = ""
    comment: str = ""
    cover_path: str = ""

    @property
    def is_resolved(self) -> bool:
        return bool(self.cover_path)

    @property
    def has_lookup_key(self) -> bool:
        return bool(self.isbn or self.alternative_key)
