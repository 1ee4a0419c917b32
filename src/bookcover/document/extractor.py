# ABOUTME: Extracts BookEntry records from list items carrying the bookcover marker.
# ABOUTME: Pulls the lookup key, title link, and nested comment out of each entry node.

from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, PageElement, Tag

from bookcover.config import ALTERNATIVE_KEY_FLAG, MARKER_PREFIX
from bookcover.document.types import BookEntry

# Comment paragraph lives in the entry's own nested list.
_COMMENT_SELECTOR = ":scope > ul > li > p"
_NESTED_LISTS = ("ul", "ol")


def _child_text(child: PageElement) -> str:
    if isinstance(child, Comment):
        return ""
    if isinstance(child, NavigableString):
        return str(child).strip()
    if isinstance(child, Tag):
        return child.get_text(" ", strip=True)
    return ""


def _find_marker(item: Tag) -> tuple[PageElement, str] | None:
    """Return the marker child of a list item and the text after the prefix."""
    for child in item.children:
        if isinstance(child, Tag) and child.name in _NESTED_LISTS:
            continue
        text = _child_text(child)
        if text.startswith(MARKER_PREFIX):
            return child, text[len(MARKER_PREFIX):].strip()
    return None


def _split_key(value: str) -> tuple[str, str]:
    """Split a marker value into (isbn, alternative_key)."""
    if value.startswith(ALTERNATIVE_KEY_FLAG):
        return "", value[len(ALTERNATIVE_KEY_FLAG):].strip()
    return value, ""


def _extract_title(item: Tag, marker: PageElement) -> str:
    for child in item.children:
        if child is marker or not isinstance(child, Tag):
            continue
        if child.name == "a":
            return str(child)
        if child.name in _NESTED_LISTS:
            continue
        if child.find("a") is not None:
            return child.decode_contents().strip()
    return ""


def _extract_comment(item: Tag) -> str:
    """Inner markup of the first paragraph in the entry's nested list; later ones are ignored."""
    paragraph = item.select_one(_COMMENT_SELECTOR)
    if paragraph is None:
        return ""
    return paragraph.decode_contents().strip()


def extract_entries(soup: BeautifulSoup) -> list[BookEntry]:
    """Build a BookEntry for every list item carrying the marker token.

    Extraction is total: an entry with no identifiable title or comment
    gets empty fields instead of failing the whole document. Entries come
    back in document order.
    """
    entries: list[BookEntry] = []
    for item in soup.find_all("li"):
        found = _find_marker(item)
        if found is None:
            continue
        marker, value = found
        isbn, alternative_key = _split_key(value)
        entries.append(
            BookEntry(
                identifier=str(item.get("id", "")),
                isbn=isbn,
                alternative_key=alternative_key,
                title=_extract_title(item, marker),
                comment=_extract_comment(item),
            )
        )
    return entries
