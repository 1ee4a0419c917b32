# ABOUTME: Rewrites entry nodes into the cover-and-tooltip widget.
# ABOUTME: Operates purely on the parsed tree; no filesystem or network access.

from bs4 import BeautifulSoup
from bs4.element import Tag

from bookcover.document.types import BookEntry


class MarkupError(Exception):
    """Raised when an entry cannot be matched to a node in the document."""


def _append_fragment(parent: Tag, markup: str) -> None:
    fragment = BeautifulSoup(markup, "html.parser")
    for node in list(fragment.contents):
        parent.append(node.extract())


def build_widget(soup: BeautifulSoup, entry: BookEntry) -> Tag:
    """Create the widget list item for a single resolved entry."""
    item = soup.new_tag(
        "li",
        attrs={"id": entry.identifier, "style": "display: inline;", "lazy": "loaded"},
    )
    cover = soup.new_tag("div", attrs={"class": "cover"})
    cover.append(soup.new_tag("img", attrs={"src": entry.cover_path}))

    tooltip = soup.new_tag("div", attrs={"class": "tooltip"})
    details = soup.new_tag("ul")
    for fragment in (entry.title, entry.comment):
        if not fragment:
            continue
        line = soup.new_tag("li")
        _append_fragment(line, fragment)
        details.append(line)
    tooltip.append(details)

    cover.append(tooltip)
    item.append(cover)
    return item


def build_markup(soup: BeautifulSoup, entries: list[BookEntry]) -> BeautifulSoup:
    """Replace each entry's source node with its widget.

    MUTATES soup in place and returns it.

    Raises:
        MarkupError: If an entry's identifier matches no node.
    """
    for entry in entries:
        if not entry.identifier:
            raise MarkupError(f"Entry has no identifier (isbn={entry.isbn!r})")
        node = soup.find(attrs={"id": entry.identifier})
        if node is None:
            raise MarkupError(f"No node with id {entry.identifier!r} in document")
        node.replace_with(build_widget(soup, entry))
    return soup
