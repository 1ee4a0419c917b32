# ABOUTME: Document package: loading, entry extraction, markup rewrite, and writing.
# ABOUTME: Exports the BookEntry record shared by every pipeline stage.

from bookcover.document.extractor import extract_entries
from bookcover.document.loader import DocumentLoadError, load_document, parse_document
from bookcover.document.markup import MarkupError, build_markup
from bookcover.document.types import BookEntry
from bookcover.document.writer import write_document

__all__ = [
    "BookEntry",
    "DocumentLoadError",
    "MarkupError",
    "build_markup",
    "extract_entries",
    "load_document",
    "parse_document",
    "write_document",
]
