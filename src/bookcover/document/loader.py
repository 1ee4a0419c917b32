# ABOUTME: Loading and parsing of reading-list HTML documents.
# ABOUTME: Finds target documents by fixed path or by searching a tree for the marker token.

import logging
from pathlib import Path

from bs4 import BeautifulSoup

from bookcover.config import MARKER_PREFIX

logger = logging.getLogger(__name__)


class DocumentLoadError(Exception):
    """Raised when a source document cannot be read."""


def load_document(path: Path) -> str:
    """Read a source document as UTF-8 text.

    Raises:
        DocumentLoadError: If the file is missing or unreadable.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(f"Cannot read document {path}: {exc}") from exc


def parse_document(html: str) -> BeautifulSoup:
    """Parse document text into a mutable tree."""
    return BeautifulSoup(html, "html.parser")


def discover_documents(
    root: Path, marker: str = MARKER_PREFIX, pattern: str = "*.html"
) -> list[Path]:
    """Find documents under root that contain the marker token.

    Files that cannot be read are logged and skipped rather than failing
    the search.
    """
    if root.is_file():
        candidates = [root]
    else:
        candidates = sorted(p for p in root.rglob(pattern) if p.is_file())

    found: list[Path] = []
    for path in candidates:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable file %s: %s", path, exc)
            continue
        if marker in text:
            found.append(path)
    logger.debug("Discovered %d document(s) under %s", len(found), root)
    return found
