# ABOUTME: Unit tests for document loading and discovery.
# ABOUTME: Tests read errors and marker-token search across a directory tree.

from pathlib import Path

import pytest

from bookcover.document.loader import DocumentLoadError, discover_documents, load_document


class TestLoadDocument:
    def test_reads_text(self, reading_list: Path) -> None:
        assert "bookcover:" in load_document(reading_list)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentLoadError, match="Cannot read"):
            load_document(tmp_path / "nope.html")


class TestDiscoverDocuments:
    def test_finds_only_marked_documents(self, tmp_path: Path) -> None:
        (tmp_path / "a.html").write_text("<p>bookcover: 1</p>")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.html").write_text("<p>bookcover: 2</p>")
        (tmp_path / "plain.html").write_text("<p>nothing</p>")
        (tmp_path / "notes.txt").write_text("bookcover: 3")

        found = discover_documents(tmp_path)
        assert found == [tmp_path / "a.html", tmp_path / "sub" / "b.html"]

    def test_custom_pattern(self, tmp_path: Path) -> None:
        (tmp_path / "notes.txt").write_text("bookcover: 3")
        assert discover_documents(tmp_path, pattern="*.txt") == [tmp_path / "notes.txt"]

    def test_single_file_root(self, reading_list: Path) -> None:
        assert discover_documents(reading_list) == [reading_list]

    def test_skips_undecodable_files(self, tmp_path: Path) -> None:
        (tmp_path / "bad.html").write_bytes(b"\xff\xfe\xfa bookcover:")
        assert discover_documents(tmp_path) == []
