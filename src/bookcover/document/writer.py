# ABOUTME: Serializes a rewritten document back to disk.
# ABOUTME: Optionally injects the cover/tooltip stylesheet into the document head.

import logging
from pathlib import Path

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

STYLE_ID = "bookcover-style"

DEFAULT_STYLESHEET = """
.cover {
  position: relative;
  display: inline-block;
  margin: 2px;
}
.cover img {
  width: 100px;
  height: 157px;
}
.cover .tooltip {
  visibility: hidden;
  position: absolute;
  z-index: 1;
  width: 240px;
  padding: 4px 8px;
  background: #fff;
  border: 1px solid #333;
}
.cover:hover .tooltip {
  visibility: visible;
}
"""


def inject_stylesheet(soup: BeautifulSoup, css: str) -> None:
    """Place css in a style block inside <head>, replacing an earlier one."""
    existing = soup.find("style", attrs={"id": STYLE_ID})
    if existing is not None:
        existing.string = css
        return

    head = soup.head
    if head is None:
        head = soup.new_tag("head")
        if soup.html is not None:
            soup.html.insert(0, head)
        else:
            soup.insert(0, head)

    style = soup.new_tag("style", attrs={"id": STYLE_ID})
    style.string = css
    head.append(style)


def write_document(
    soup: BeautifulSoup, path: Path, stylesheet: str | None = None
) -> Path:
    """Overwrite path with the serialized tree.

    Args:
        soup: The (already rewritten) document tree.
        path: Destination file; existing content is fully replaced.
        stylesheet: CSS to inject into <head> before writing, if any.

    Returns:
        The path written.
    """
    if stylesheet is not None:
        inject_stylesheet(soup, stylesheet)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(str(soup), encoding="utf-8")
    logger.info("Wrote %s", path)
    return path
