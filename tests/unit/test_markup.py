# ABOUTME: Unit tests for the widget markup builder.
# ABOUTME: Tests node replacement, tooltip contents, and missing-node errors.

import pytest

from bookcover.document.loader import parse_document
from bookcover.document.markup import MarkupError, build_markup
from bookcover.document.types import BookEntry

DOC = '<ul><li id="b1"><p>bookcover: 1</p></li><li id="other">keep</li></ul>'


class TestBuildMarkup:
    def test_replaces_node_with_widget(self) -> None:
        soup = parse_document(DOC)
        entry = BookEntry(
            identifier="b1",
            title='<a href="/x">Title</a>',
            comment="Nice",
            cover_path="covers/1.jpg",
        )
        build_markup(soup, [entry])

        item = soup.find(id="b1")
        assert item.name == "li"
        assert item["style"] == "display: inline;"
        assert item["lazy"] == "loaded"
        assert item.select_one("div.cover > img")["src"] == "covers/1.jpg"
        lines = item.select("div.tooltip li")
        assert [str(li.decode_contents()) for li in lines] == ['<a href="/x">Title</a>', "Nice"]
        assert "bookcover:" not in str(soup)

    def test_leaves_other_nodes(self) -> None:
        soup = parse_document(DOC)
        build_markup(soup, [BookEntry(identifier="b1", cover_path="covers/default.jpg")])
        assert soup.find(id="other").get_text() == "keep"

    def test_empty_fields_omitted_from_tooltip(self) -> None:
        soup = parse_document(DOC)
        build_markup(soup, [BookEntry(identifier="b1", cover_path="covers/default.jpg")])
        assert soup.select("#b1 div.tooltip li") == []
        assert soup.select_one("#b1 div.tooltip ul") is not None

    def test_only_comment(self) -> None:
        soup = parse_document(DOC)
        entry = BookEntry(identifier="b1", comment="Only this", cover_path="covers/default.jpg")
        build_markup(soup, [entry])
        assert [li.get_text() for li in soup.select("#b1 div.tooltip li")] == ["Only this"]

    def test_missing_node_raises(self) -> None:
        soup = parse_document(DOC)
        with pytest.raises(MarkupError, match="missing"):
            build_markup(soup, [BookEntry(identifier="missing", cover_path="c.jpg")])

    def test_empty_identifier_raises(self) -> None:
        soup = parse_document(DOC)
        with pytest.raises(MarkupError, match="no identifier"):
            build_markup(soup, [BookEntry(identifier="", isbn="1", cover_path="c.jpg")])
