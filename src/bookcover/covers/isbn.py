# ABOUTME: ISBN normalization and ISBN-13 to ISBN-10 conversion.
# ABOUTME: Used to build lookup queries; cache keys keep the ISBN as written.

import re

_SEPARATORS_RE = re.compile(r"[\s-]")


def normalize_isbn(isbn: str) -> str:
    """Strip spaces and hyphens and upper-case a trailing X."""
    return _SEPARATORS_RE.sub("", isbn).upper()


def isbn10_check_digit(first_nine: str) -> str:
    total = sum((10 - i) * int(digit) for i, digit in enumerate(first_nine))
    check = (11 - total % 11) % 11
    return "X" if check == 10 else str(check)


def isbn13_to_isbn10(isbn: str) -> str | None:
    """Convert an ISBN to its ISBN-10 form.

    ISBN-10 input is returned normalized. Returns None for 979-prefixed
    ISBN-13s (which have no ISBN-10) and anything that is not an ISBN.
    """
    clean = normalize_isbn(isbn)
    if len(clean) == 10 and clean[:9].isdigit() and (clean[9].isdigit() or clean[9] == "X"):
        return clean
    if len(clean) != 13 or not clean.isdigit() or not clean.startswith("978"):
        return None
    body = clean[3:12]
    return body + isbn10_check_digit(body)
